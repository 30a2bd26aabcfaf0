"""
searching.py — Searching Trace Generators
==========================================
Linear and binary search over an element sequence.  Both return

    {"found": bool, "index": int | None, "sequence": [...]}

where `sequence` is the array the search actually ran on.

Binary search needs ascending order.  If the caller's sequence is not
sorted, it is sorted first and the trace opens with a `notice` step;
the same notice is appended to the caller-supplied `notices` list, so
the substitution is never silent.  Midpoint = (low + high) // 2.
"""

import logging
from typing import Generator, List

from algorithms.step import Step, StepKind, step
from structures.errors import UnsortedInputForBinarySearch

log = logging.getLogger(__name__)

SearchGenerator = Generator[Step, None, dict]


def is_sorted(values: List[float]) -> bool:
    return all(values[i - 1] <= values[i] for i in range(1, len(values)))


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
def linear_search(values: List[float], target: float) -> SearchGenerator:
    arr = list(values)
    for i, v in enumerate(arr):
        yield step(
            StepKind.COMPARE, [i],
            f"Comparing element at index {i} ({v}) with the target ({target}).",
            values=(v, target),
        )
        if v == target:
            yield step(StepKind.FOUND, [i], f"Target {target} found at index {i}!", value=target)
            return {"found": True, "index": i, "sequence": arr}
    yield step(StepKind.NOT_FOUND, [], f"Target {target} was not found.", value=target)
    return {"found": False, "index": None, "sequence": arr}


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
def binary_search(values: List[float], target: float, notices: list = None) -> SearchGenerator:
    """
    Args:
        values  : Sequence to search; sorted ascending first if it is not.
        target  : Value to look for.
        notices : Optional list the auto-sort notice is appended to.
    """
    arr = list(values)
    if not is_sorted(arr):
        arr.sort()
        notice = UnsortedInputForBinarySearch(
            "Binary Search requires a sorted array. Your array has been sorted automatically."
        )
        log.warning("binary search input was unsorted; sorted to %s", arr)
        if notices is not None:
            notices.append(notice)
        yield step(
            StepKind.NOTICE, [],
            notice.message,
            code=notice.code, message=notice.message, instruction=notice.instruction,
        )

    low, high = 0, len(arr) - 1
    while low <= high:
        mid = (low + high) // 2
        yield step(
            StepKind.RANGE, [low, high],
            f"Searching in range from index {low} to {high}.",
            low=low, high=high,
        )
        yield step(
            StepKind.COMPARE, [mid],
            f"Comparing middle element {arr[mid]} with target {target}.",
            values=(arr[mid], target),
        )
        if arr[mid] == target:
            yield step(StepKind.FOUND, [mid], f"Target {target} found at index {mid}!", value=target)
            return {"found": True, "index": mid, "sequence": arr}
        if arr[mid] < target:
            low = mid + 1
            yield step(
                StepKind.NARROW, [mid],
                "Target is larger. Ignoring left half.",
                low=low, high=high, discarded="left",
            )
        else:
            high = mid - 1
            yield step(
                StepKind.NARROW, [mid],
                "Target is smaller. Ignoring right half.",
                low=low, high=high, discarded="right",
            )

    yield step(StepKind.NOT_FOUND, [], f"Target {target} was not found.", value=target)
    return {"found": False, "index": None, "sequence": arr}
