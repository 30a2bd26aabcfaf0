"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit
issues).  Yields the same step kinds as BFS: START, VISIT, ENQUEUE
(structure="stack"), COMPLETE.

Neighbours are pushed in REVERSE adjacency order so they pop in the
original adjacency order.  Like BFS, a node is marked visited when it is
pushed, which keeps it off the stack a second time; the VISIT step fires
when it is popped.

Returns {"order": [labels in visit order]}.
"""

from typing import Generator, List

from algorithms.step import Step, StepKind, step
from structures.graph import Graph


def dfs(graph: Graph, start: str) -> Generator[Step, None, dict]:
    stack   = [start]
    visited = {start}
    order: List[str] = []

    yield step(StepKind.START, [start], f"Starting DFS at node {start}.", algorithm="dfs")

    while stack:
        node = stack.pop()
        order.append(node)
        yield step(StepKind.VISIT, [node], f"Visiting node {node}.", value=node, order=order)

        for nbr in reversed(graph.neighbours(node)):
            if nbr in visited:
                continue
            visited.add(nbr)
            stack.append(nbr)
            yield step(
                StepKind.ENQUEUE, [nbr],
                f"Adding neighbor {nbr} to the stack.",
                structure="stack", frontier=list(stack),
            )

    yield step(StepKind.COMPLETE, [], "DFS traversal complete.")
    return {"order": order}
