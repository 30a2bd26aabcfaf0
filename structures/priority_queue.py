"""
priority_queue.py — Binary-Heap Priority Queue
================================================
Ordering primitive behind Dijkstra and A*.

    pq = PriorityQueue("min")
    pq.insert("A", 0)
    entry = pq.extract_best()      # Entry(key="A", priority=0)

Lazy deletion:
  There is no decrease-key.  Pathfinders re-insert a key with its
  improved priority, so the heap may hold stale entries for the same key.
  Callers MUST compare an extracted entry's priority against the best
  value they currently know for that key and skip it when it is worse.

Ties are broken by insertion order (FIFO), which keeps traces
deterministic for equal priorities.
"""

import heapq
import itertools
from typing import Hashable, List, NamedTuple, Tuple


class Entry(NamedTuple):
    key:      Hashable
    priority: float


class PriorityQueue:
    """
    Attributes:
        order : "min" (smallest priority first) or "max" (largest first).
    """

    def __init__(self, order: str = "min"):
        if order not in ("min", "max"):
            raise ValueError(f"order must be 'min' or 'max', not {order!r}")
        self.order = order
        self._heap: List[Tuple[float, int, Hashable, float]] = []
        self._counter = itertools.count()

    def insert(self, key: Hashable, priority: float) -> None:
        rank = priority if self.order == "min" else -priority
        heapq.heappush(self._heap, (rank, next(self._counter), key, priority))

    def extract_best(self) -> Entry:
        if not self._heap:
            raise IndexError("extract from an empty priority queue")
        _, _, key, priority = heapq.heappop(self._heap)
        return Entry(key, priority)

    def is_empty(self) -> bool:
        return not self._heap

    def snapshot(self) -> List[Entry]:
        """Entries in extraction order, without consuming them (for payloads)."""
        return [Entry(key, priority) for _, _, key, priority in sorted(self._heap)]

    def __len__(self) -> int:
        return len(self._heap)

    def __repr__(self) -> str:
        return f"PriorityQueue(order={self.order}, size={len(self)})"
