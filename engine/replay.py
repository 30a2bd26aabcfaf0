"""
replay.py — Array State Replay
================================
Applies the write steps of a sorting trace to a clone of the initial
array.  Because Steps carry every value they write, replaying any prefix
is deterministic: prefix k always reaches the same intermediate array.

Cells are (value, origin) pairs, origin being the element's index in the
initial array, so two equal values stay distinguishable and stability
can be checked after a full replay.

    replay_array([3, 1, 2], result.trace)            → [1, 2, 3]
    replay_array([3, 1, 2], result.trace.prefix(4))  → state after 4 steps
"""

from typing import Iterable, List, Tuple

from algorithms.step import Step, StepKind, WRITE_KINDS

Cell = Tuple[float, int]


def replay_cells(initial: Iterable[float], steps: Iterable[Step]) -> List[Cell]:
    cells: List[Cell] = [(v, i) for i, v in enumerate(initial)]

    for s in steps:
        if s.kind not in WRITE_KINDS:
            continue
        if s.kind is StepKind.SWAP:
            i, j = s.subjects
            cells[i], cells[j] = cells[j], cells[i]
        elif s.kind is StepKind.SHIFT:
            src, dst = s.subjects
            cells[dst] = cells[src]
        else:  # PLACE / OVERWRITE
            (k,) = s.subjects
            cells[k] = (s.payload["value"], s.payload["origin"])
    return cells


def replay_array(initial: Iterable[float], steps: Iterable[Step]) -> List[float]:
    return [v for v, _ in replay_cells(initial, steps)]
