"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over structures.PriorityQueue (min order).

Yields a Step at:
  1. Initialise, push start          →  START
  2. Pop an entry that is stale      →  STALE (lazy deletion, skipped)
  3. Pop the best live entry         →  VISIT
  4. Successful relaxation           →  UPDATE, then ENQUEUE (heap snapshot)
  5. End node popped                 →  stop exploring
  6. Path reconstructed              →  PATH, then COMPLETE

Distances start at ∞ except start = 0.  There is no decrease-key: an
improved node is pushed again and the old entry is discarded when it is
popped with a priority worse than the best known distance.

If the end node is never reached, path reconstruction raises
PathNotFound instead of returning a partial path.

Returns {"path": [...], "total_weight": number, "distances": {label: number}}.

Correctness note: Dijkstra requires non-negative weights; the graph
builder rejects negative ones.
"""

from typing import Dict, Generator, List, Optional

from algorithms.paths import reconstruct_path
from algorithms.step import Step, StepKind, step
from structures.graph import Graph
from structures.priority_queue import PriorityQueue


def dijkstra(graph: Graph, start: str, end: str) -> Generator[Step, None, dict]:

    INF = float("inf")

    dist:     Dict[str, float]          = {label: INF for label in graph.nodes}
    previous: Dict[str, Optional[str]]  = {}
    order:    List[str]                 = []
    dist[start] = 0
    pq = PriorityQueue("min")
    pq.insert(start, 0)

    yield step(StepKind.START, [start], f"Starting Dijkstra's at node {start}.", algorithm="dijkstra")

    while not pq.is_empty():
        node, d = pq.extract_best()

        if d > dist[node]:
            yield step(
                StepKind.STALE, [node],
                f"Skipping stale entry for {node} (distance {d} > best {dist[node]}).",
                priority=d, best=dist[node],
            )
            continue

        order.append(node)
        yield step(
            StepKind.VISIT, [node],
            f"Visiting node {node} with distance {d}.",
            value=node, order=order,
        )

        if node == end:
            break

        for nbr in graph.neighbours(node):
            new_dist = dist[node] + graph.weight(node, nbr)
            if new_dist < dist[nbr]:
                dist[nbr]     = new_dist
                previous[nbr] = node
                pq.insert(nbr, new_dist)
                yield step(
                    StepKind.UPDATE, [nbr],
                    f"Updating distance to {nbr} to {new_dist}.",
                    distance=new_dist, via=node, priority=new_dist,
                )
                yield step(
                    StepKind.ENQUEUE, [nbr],
                    f"Pushing {nbr} onto the priority queue with priority {new_dist}.",
                    structure="heap", frontier=[list(e) for e in pq.snapshot()],
                )

    path  = reconstruct_path(previous, start, end)
    total = dist[end]
    yield step(
        StepKind.PATH, path,
        f"Shortest path found: {' → '.join(path)} (total weight {total}).",
        path=path, total_weight=total,
    )
    yield step(StepKind.COMPLETE, [], "Dijkstra's algorithm complete.")
    return {
        "path":         path,
        "total_weight": total,
        "distances":    {k: v for k, v in dist.items() if v != INF},
    }
