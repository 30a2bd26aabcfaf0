"""
sorting.py — Sorting Trace Generators
======================================
Bubble, selection, insertion, quick, merge and heap sort.  Each is a
generator that yields Steps and returns {"sorted_array": [...]}.

Every algorithm is direction-aware: descending order flips the
comparator (`_precedes`) instead of reversing the result, so every
narration in the trace talks about the order actually requested.

Steps emitted:
  • compare    – two indices are being compared
  • swap       – two indices exchange values
  • shift      – insertion sort moves a value one slot right
  • place      – insertion sort drops the key into its hole
  • overwrite  – merge sort writes a merged value back
  • mark       – pivot / key / running minimum (or maximum)
  • finalized  – an index holds its terminal value for the rest of the trace
  • notice     – the input already follows the requested order

Stability: insertion and merge sort keep equal values in their input
order (place / overwrite carry the element's `origin` index so this is
observable on replay).  Bubble, selection, quick and heap sort make no
such promise.

Pivots are the last element of the active range (Lomuto).  Merge sort
splits at low + (high - low) // 2.  Heap sort builds a max-heap for
ascending order (min-heap for descending) bottom-up, then repeatedly
moves the root to the end.

An input that already follows the requested order is still sorted, but the
trace opens with a notice step (and `notices`, when given, receives an
AlreadySortedInput) so the user knows no element will move.
"""

import logging
from enum import Enum
from typing import Callable, Generator, List

from algorithms.step import Step, StepKind, step
from structures.errors import AlreadySortedInput

log = logging.getLogger(__name__)


class SortOrder(Enum):
    ASCENDING  = "ascending"
    DESCENDING = "descending"


SortGenerator = Generator[Step, None, dict]


def _precedes(order: SortOrder) -> Callable[[float, float], bool]:
    """True when `a` must come strictly before `b` under `order`."""
    if order is SortOrder.ASCENDING:
        return lambda a, b: a < b
    return lambda a, b: a > b


def _extreme(order: SortOrder) -> str:
    return "minimum" if order is SortOrder.ASCENDING else "maximum"


def _role(order: SortOrder) -> str:
    return "min" if order is SortOrder.ASCENDING else "max"


def _finalize_all(arr: List[float]) -> SortGenerator:
    for i, v in enumerate(arr):
        yield step(StepKind.FINALIZED, [i], f"Element {v} is in its final position.", value=v)


def _sorted_notice(arr: List[float], order: SortOrder, notices) -> SortGenerator:
    """Emit a notice when the input already satisfies `order`; the sort still runs."""
    before = _precedes(order)
    if any(before(arr[i], arr[i - 1]) for i in range(1, len(arr))):
        return
    notice = AlreadySortedInput(f"Array is already sorted in {order.value} order.")
    log.info("sort input already %s: %s", order.value, arr)
    if notices is not None:
        notices.append(notice)
    yield step(
        StepKind.NOTICE, [],
        notice.message,
        code=notice.code, message=notice.message, instruction=notice.instruction,
    )


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order  = SortOrder(order)
    before = _precedes(order)
    arr    = list(values)
    yield from _sorted_notice(arr, order, notices)
    n      = len(arr)
    word   = "Largest" if order is SortOrder.ASCENDING else "Smallest"

    for i in range(n - 1):
        for j in range(n - i - 1):
            yield step(
                StepKind.COMPARE, [j, j + 1],
                f"Comparing adjacent elements {arr[j]} and {arr[j + 1]}.",
                values=(arr[j], arr[j + 1]),
            )
            if before(arr[j + 1], arr[j]):
                yield step(
                    StepKind.SWAP, [j, j + 1],
                    f"Swapping {arr[j]} and {arr[j + 1]} because they are out of order.",
                    values=(arr[j], arr[j + 1]),
                )
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
        last = n - 1 - i
        yield step(
            StepKind.FINALIZED, [last],
            f"{word} unsorted element {arr[last]} is now in its final position.",
            value=arr[last],
        )
    if arr:
        yield step(StepKind.FINALIZED, [0], "Array is fully sorted!", value=arr[0])
    return {"sorted_array": arr}


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order   = SortOrder(order)
    before  = _precedes(order)
    arr     = list(values)
    yield from _sorted_notice(arr, order, notices)
    extreme = _extreme(order)

    for i in range(len(arr)):
        best = i
        yield step(
            StepKind.MARK, [i],
            f"Starting pass {i + 1}. Assuming {arr[i]} is the {extreme}.",
            role=_role(order), value=arr[i],
        )
        for j in range(i + 1, len(arr)):
            yield step(
                StepKind.COMPARE, [j, best],
                f"Comparing {arr[j]} with current {extreme} {arr[best]}.",
                values=(arr[j], arr[best]),
            )
            if before(arr[j], arr[best]):
                best = j
                yield step(
                    StepKind.MARK, [j],
                    f"{arr[j]} is the new {extreme}.",
                    role=_role(order), value=arr[j],
                )
        if best != i:
            yield step(
                StepKind.SWAP, [i, best],
                f"Swapping {arr[i]} with the {extreme} element {arr[best]}.",
                values=(arr[i], arr[best]),
            )
            arr[i], arr[best] = arr[best], arr[i]
        yield step(
            StepKind.FINALIZED, [i],
            f"Element {arr[i]} is now in its final sorted position.",
            value=arr[i],
        )
    return {"sorted_array": arr}


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order  = SortOrder(order)
    before = _precedes(order)
    arr    = list(values)
    yield from _sorted_notice(arr, order, notices)
    origin = list(range(len(arr)))

    for i in range(1, len(arr)):
        key, key_origin = arr[i], origin[i]
        yield step(
            StepKind.MARK, [i],
            f"Picking up {key} as the key to insert.",
            role="key", value=key,
        )
        j = i - 1
        while j >= 0:
            yield step(
                StepKind.COMPARE, [j, j + 1],
                f"Comparing {key} with {arr[j]}.",
                values=(arr[j], key),
            )
            # strict comparison: equal values never jump over each other
            if not before(key, arr[j]):
                break
            yield step(
                StepKind.SHIFT, [j, j + 1],
                f"Shifting {arr[j]} to the right to make space for the key.",
                value=arr[j],
            )
            arr[j + 1], origin[j + 1] = arr[j], origin[j]
            j -= 1
        arr[j + 1], origin[j + 1] = key, key_origin
        yield step(
            StepKind.PLACE, [j + 1],
            f"Placing {key} in its correct sorted position.",
            value=key, origin=key_origin,
        )

    yield from _finalize_all(arr)
    return {"sorted_array": arr}


# ---------------------------------------------------------------------------
# Quick sort (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order = SortOrder(order)
    arr   = list(values)
    yield from _sorted_notice(arr, order, notices)
    yield from _quick(arr, 0, len(arr) - 1, _precedes(order))
    return {"sorted_array": arr}


def _quick(arr: List[float], low: int, high: int, before) -> SortGenerator:
    if low > high:
        return
    if low == high:
        yield step(
            StepKind.FINALIZED, [low],
            f"Element {arr[low]} is alone in its range, so it is in its final position.",
            value=arr[low],
        )
        return
    p = yield from _partition(arr, low, high, before)
    yield from _quick(arr, low, p - 1, before)
    yield from _quick(arr, p + 1, high, before)


def _partition(arr: List[float], low: int, high: int, before) -> Generator[Step, None, int]:
    pivot = arr[high]
    yield step(StepKind.MARK, [high], f"Selecting {pivot} as the pivot.", role="pivot", value=pivot)
    i = low - 1
    for j in range(low, high):
        yield step(
            StepKind.COMPARE, [j, high],
            f"Comparing {arr[j]} with pivot {pivot}.",
            values=(arr[j], pivot),
        )
        if not before(pivot, arr[j]):
            i += 1
            if i != j:
                yield step(
                    StepKind.SWAP, [i, j],
                    f"Swapping {arr[i]} and {arr[j]}.",
                    values=(arr[i], arr[j]),
                )
                arr[i], arr[j] = arr[j], arr[i]
    p = i + 1
    if p != high:
        yield step(
            StepKind.SWAP, [p, high],
            f"Swapping pivot {pivot} to its correct position.",
            values=(arr[p], arr[high]),
        )
        arr[p], arr[high] = arr[high], arr[p]
    yield step(StepKind.FINALIZED, [p], f"Pivot {pivot} is in its final position.", value=pivot)
    return p


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def merge_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order  = SortOrder(order)
    arr    = list(values)
    yield from _sorted_notice(arr, order, notices)
    origin = list(range(len(arr)))
    yield from _merge_sort(arr, origin, 0, len(arr) - 1, _precedes(order))
    yield from _finalize_all(arr)
    return {"sorted_array": arr}


def _merge_sort(arr, origin, low: int, high: int, before) -> SortGenerator:
    if low < high:
        mid = low + (high - low) // 2
        yield from _merge_sort(arr, origin, low, mid, before)
        yield from _merge_sort(arr, origin, mid + 1, high, before)
        yield from _merge(arr, origin, low, mid, high, before)


def _merge(arr, origin, low: int, mid: int, high: int, before) -> SortGenerator:
    i, j   = low, mid + 1
    merged = []
    while i <= mid and j <= high:
        yield step(
            StepKind.COMPARE, [i, j],
            f"Comparing {arr[i]} and {arr[j]}.",
            values=(arr[i], arr[j]),
        )
        # take from the right half only when strictly first: keeps the sort stable
        if before(arr[j], arr[i]):
            merged.append((arr[j], origin[j]))
            j += 1
        else:
            merged.append((arr[i], origin[i]))
            i += 1
    merged.extend(zip(arr[i:mid + 1], origin[i:mid + 1]))
    merged.extend(zip(arr[j:high + 1], origin[j:high + 1]))

    for k, (value, src) in enumerate(merged, start=low):
        yield step(
            StepKind.OVERWRITE, [k],
            f"Overwriting arr[{k}] with {value}.",
            value=value, origin=src,
        )
        arr[k], origin[k] = value, src


# ---------------------------------------------------------------------------
# Heap sort
# ---------------------------------------------------------------------------
def heap_sort(values: List[float], order="ascending", notices: list = None) -> SortGenerator:
    order  = SortOrder(order)
    before = _precedes(order)
    arr    = list(values)
    yield from _sorted_notice(arr, order, notices)
    n      = len(arr)

    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(arr, n, i, before)

    for end in range(n - 1, 0, -1):
        yield step(
            StepKind.SWAP, [0, end],
            f"Swapping root {arr[0]} with last element {arr[end]}.",
            values=(arr[0], arr[end]),
        )
        arr[0], arr[end] = arr[end], arr[0]
        yield step(
            StepKind.FINALIZED, [end],
            f"Element {arr[end]} is in its final position.",
            value=arr[end],
        )
        yield from _sift_down(arr, end, 0, before)

    if arr:
        yield step(StepKind.FINALIZED, [0], f"Element {arr[0]} is in its final position.", value=arr[0])
    return {"sorted_array": arr}


def _sift_down(arr: List[float], size: int, root: int, before) -> SortGenerator:
    while True:
        top = root
        for child in (2 * root + 1, 2 * root + 2):
            if child >= size:
                continue
            yield step(
                StepKind.COMPARE, [child, top],
                f"Comparing child {arr[child]} with {arr[top]}.",
                values=(arr[child], arr[top]),
            )
            if before(arr[top], arr[child]):
                top = child
        if top == root:
            return
        yield step(
            StepKind.SWAP, [root, top],
            f"Swapping {arr[root]} and {arr[top]}.",
            values=(arr[root], arr[top]),
        )
        arr[root], arr[top] = arr[top], arr[root]
        root = top
