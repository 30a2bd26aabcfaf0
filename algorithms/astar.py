"""
astar.py — A* Search
=====================
Generator-based A* with a pluggable heuristic.  Same structure and step
kinds as Dijkstra; the queue priority is f = g + h(node, end).

The heuristic comes from outside (straight-line distance over the
node display coordinates in the UI).  It is NOT checked for
admissibility: if it overestimates the remaining cost the returned path
may not be the shortest.  That is a documented limitation, not
something the engine corrects.

Built-in heuristic factories (positions: {label: (x, y)}):
  • euclidean   – √(Δx² + Δy²)
  • manhattan   – |Δx| + |Δy|
  • zero        – h = 0, A* degrades to Dijkstra
A node missing from `positions` gets h = 0.
"""

import math
from typing import Callable, Dict, Generator, List, Mapping, Optional, Sequence

from algorithms.paths import reconstruct_path
from algorithms.step import Step, StepKind, step
from structures.graph import Graph
from structures.priority_queue import PriorityQueue

Heuristic = Callable[[str, str], float]


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------
def _xy(pos) -> Sequence[float]:
    if isinstance(pos, Mapping):
        return pos["x"], pos["y"]
    return pos[0], pos[1]


def euclidean(positions: Mapping[str, object]) -> Heuristic:
    def h(u: str, v: str) -> float:
        if u not in positions or v not in positions:
            return 0.0
        (ux, uy), (vx, vy) = _xy(positions[u]), _xy(positions[v])
        return math.sqrt((ux - vx) ** 2 + (uy - vy) ** 2)
    return h


def manhattan(positions: Mapping[str, object]) -> Heuristic:
    def h(u: str, v: str) -> float:
        if u not in positions or v not in positions:
            return 0.0
        (ux, uy), (vx, vy) = _xy(positions[u]), _xy(positions[v])
        return abs(ux - vx) + abs(uy - vy)
    return h


def zero(positions: Optional[Mapping[str, object]] = None) -> Heuristic:
    """h=0 → A* degrades to Dijkstra.  Useful for teaching."""
    return lambda u, v: 0.0


HEURISTICS: Dict[str, Callable[..., Heuristic]] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "zero":      zero,
}


def make_heuristic(name: str = "euclidean", positions: Optional[Mapping[str, object]] = None) -> Heuristic:
    if not positions:
        return zero()
    return HEURISTICS.get(name, euclidean)(positions)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(
    graph: Graph,
    start: str,
    end: str,
    heuristic: Optional[Heuristic] = None,
) -> Generator[Step, None, dict]:
    """
    Args:
        graph     : The graph.
        start     : Start node label.
        end       : Goal node label.
        heuristic : callable(node, end) → estimated remaining cost; h = 0 if None.
    """
    h = heuristic or zero()

    INF = float("inf")
    g_score:  Dict[str, float]          = {label: INF for label in graph.nodes}
    f_score:  Dict[str, float]          = {label: INF for label in graph.nodes}
    previous: Dict[str, Optional[str]]  = {}
    order:    List[str]                 = []

    g_score[start] = 0
    f_score[start] = h(start, end)
    open_set = PriorityQueue("min")
    open_set.insert(start, f_score[start])

    yield step(StepKind.START, [start], f"Starting A* at node {start}.", algorithm="astar")

    while not open_set.is_empty():
        node, f = open_set.extract_best()

        if f > f_score[node]:
            yield step(
                StepKind.STALE, [node],
                f"Skipping stale entry for {node} (f={f:.2f} > best {f_score[node]:.2f}).",
                priority=f, best=f_score[node],
            )
            continue

        order.append(node)
        yield step(
            StepKind.VISIT, [node],
            f"Visiting node {node} (g={g_score[node]}, f={f:.2f}).",
            value=node, order=order,
        )

        if node == end:
            break

        for nbr in graph.neighbours(node):
            tentative_g = g_score[node] + graph.weight(node, nbr)
            if tentative_g < g_score[nbr]:
                previous[nbr] = node
                g_score[nbr]  = tentative_g
                f_score[nbr]  = tentative_g + h(nbr, end)
                open_set.insert(nbr, f_score[nbr])
                yield step(
                    StepKind.UPDATE, [nbr],
                    f"Updating scores for {nbr}: g={tentative_g}, f={f_score[nbr]:.2f}.",
                    distance=tentative_g, via=node, priority=f_score[nbr],
                )
                yield step(
                    StepKind.ENQUEUE, [nbr],
                    f"Pushing {nbr} onto the open set with f={f_score[nbr]:.2f}.",
                    structure="heap", frontier=[list(e) for e in open_set.snapshot()],
                )

    path  = reconstruct_path(previous, start, end)
    total = g_score[end]
    yield step(
        StepKind.PATH, path,
        f"Path to {end} found: {' → '.join(path)} (total weight {total}).",
        path=path, total_weight=total,
    )
    yield step(StepKind.COMPLETE, [], "A* search complete.")
    return {
        "path":         path,
        "total_weight": total,
        "distances":    {k: v for k, v in g_score.items() if v != INF},
    }
