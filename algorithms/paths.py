"""
paths.py — Path Reconstruction
===============================
Shared by Dijkstra and A*: walk the predecessor map backward from the
end node to the start node.

An unreachable end node has no predecessor chain back to the start.
That case is detected explicitly and raised as PathNotFound, never
returned as an empty or partial path.
"""

from typing import Dict, List, Optional

from structures.errors import PathNotFound


def reconstruct_path(previous: Dict[str, Optional[str]], start: str, end: str) -> List[str]:
    path    = [end]
    current = end
    while current != start:
        current = previous.get(current)
        if current is None or current in path:
            raise PathNotFound(start, end)
        path.append(current)
    path.reverse()
    return path
