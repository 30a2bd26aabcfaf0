"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal from a start node.  Yields a Step at:
  1. Start                     →  START
  2. Dequeue a node            →  VISIT (appends to the visited order)
  3. Enqueue an unseen nbr     →  ENQUEUE (queue snapshot in payload)
  4. Queue exhausted           →  COMPLETE

A node is marked visited when it is ENQUEUED, so it is never scheduled
twice; the VISIT step fires when it is dequeued and processed.
Neighbours are processed in adjacency-insertion order.

Returns {"order": [labels in visit order]}.
"""

from collections import deque
from typing import Generator, List

from algorithms.step import Step, StepKind, step
from structures.graph import Graph


def bfs(graph: Graph, start: str) -> Generator[Step, None, dict]:
    """
    Args:
        graph : The graph to traverse.
        start : Starting node label (validated by the Recorder).
    """
    queue   = deque([start])
    visited = {start}
    order: List[str] = []

    yield step(StepKind.START, [start], f"Starting BFS at node {start}.", algorithm="bfs")

    while queue:
        node = queue.popleft()
        order.append(node)
        yield step(StepKind.VISIT, [node], f"Visiting node {node}.", value=node, order=order)

        for nbr in graph.neighbours(node):
            if nbr in visited:
                continue
            visited.add(nbr)
            queue.append(nbr)
            yield step(
                StepKind.ENQUEUE, [nbr],
                f"Queueing neighbor {nbr}.",
                structure="queue", frontier=list(queue),
            )

    yield step(StepKind.COMPLETE, [], "BFS traversal complete.")
    return {"order": order}
