import pytest

from algorithms.sorting import (
    bubble_sort, heap_sort, insertion_sort, merge_sort, quick_sort, selection_sort,
)
from algorithms.step import StepKind, Trace, WRITE_KINDS
from engine.recorder import Recorder
from engine.replay import replay_cells
from structures.errors import AlreadySortedInput

SORTS = [bubble_sort, selection_sort, insertion_sort, quick_sort, merge_sort, heap_sort]

INPUTS = [
    [5, 3, 8, 1, 9, 2],
    [1, 2, 3, 4, 5],
    [5, 4, 3, 2, 1],
    [7, 7, 7, 7],
    [3, -1, 3, 0, -1, 2.5, 10],
    [2, 1],
]


def run(fn, values, order="ascending"):
    gen = fn(values, order)
    steps = []
    try:
        while True:
            steps.append(next(gen))
    except StopIteration as stop:
        return Trace(steps), stop.value


@pytest.mark.parametrize("fn", SORTS)
@pytest.mark.parametrize("values", INPUTS)
def test_sorted_artifact_both_orders(fn, values):
    _, asc = run(fn, values, "ascending")
    _, desc = run(fn, values, "descending")
    assert asc["sorted_array"] == sorted(values)
    assert desc["sorted_array"] == sorted(values, reverse=True)


@pytest.mark.parametrize("fn", SORTS)
def test_input_is_not_mutated(fn):
    values = [4, 2, 3, 1]
    run(fn, values)
    assert values == [4, 2, 3, 1]


@pytest.mark.parametrize("fn", SORTS)
@pytest.mark.parametrize("order", ["ascending", "descending"])
def test_every_index_finalized_once(fn, order):
    values = [9, 4, 7, 1, 8, 2, 2, 6]
    trace, _ = run(fn, values, order)
    finalized = [s.subjects[0] for s in trace.of_kind(StepKind.FINALIZED)]
    assert sorted(finalized) == list(range(len(values)))


@pytest.mark.parametrize("fn", SORTS)
@pytest.mark.parametrize("order", ["ascending", "descending"])
def test_finalized_index_is_never_touched_again(fn, order):
    trace, _ = run(fn, [6, 1, 5, 3, 3, 9, 0, 4], order)
    locked = set()
    for s in trace:
        if s.kind in WRITE_KINDS or s.kind is StepKind.COMPARE:
            assert not locked.intersection(s.subjects), s
        if s.kind is StepKind.FINALIZED:
            locked.add(s.subjects[0])


def test_bubble_sort_finalizes_largest_each_pass():
    trace, _ = run(bubble_sort, [3, 1, 2])
    finals = trace.of_kind(StepKind.FINALIZED)
    assert [s.subjects[0] for s in finals] == [2, 1, 0]
    assert [s.payload["value"] for s in finals] == [3, 2, 1]


def test_descending_narration_talks_about_requested_order():
    trace, _ = run(selection_sort, [1, 3, 2], "descending")
    marks = trace.of_kind(StepKind.MARK)
    assert marks[0].payload["role"] == "max"
    assert "maximum" in marks[0].narrative


@pytest.mark.parametrize("fn", [insertion_sort, merge_sort])
@pytest.mark.parametrize("order", ["ascending", "descending"])
def test_stable_sorts_keep_equal_values_in_input_order(fn, order):
    values = [3, 1, 3, 2, 1, 3, 2]
    trace, _ = run(fn, values, order)
    cells = replay_cells(values, trace)
    for v in set(values):
        origins = [o for value, o in cells if value == v]
        assert origins == sorted(origins)


def test_selection_sort_is_observably_unstable():
    values = [2, 2, 1]
    trace, _ = run(selection_sort, values)
    cells = replay_cells(values, trace)
    assert [o for v, o in cells if v == 2] == [1, 0]


def test_quick_sort_uses_last_element_as_pivot():
    trace, _ = run(quick_sort, [4, 9, 1, 5])
    first_mark = trace.of_kind(StepKind.MARK)[0]
    assert first_mark.subjects == (3,)
    assert first_mark.payload == {"role": "pivot", "value": 5}


def test_merge_sort_first_compare_is_leftmost_pair():
    trace, _ = run(merge_sort, [4, 3, 2, 1])
    first = trace.of_kind(StepKind.COMPARE)[0]
    assert first.subjects == (0, 1)


def test_insertion_sort_shifts_then_places():
    trace, _ = run(insertion_sort, [2, 1])
    kinds = [k for k in trace.kinds() if k is not StepKind.FINALIZED]
    assert kinds == [StepKind.MARK, StepKind.COMPARE, StepKind.SHIFT, StepKind.PLACE]


def test_heap_sort_starts_with_heap_construction():
    trace, _ = run(heap_sort, [2, 1, 3])
    assert trace[0].kind is StepKind.COMPARE
    assert set(trace[0].subjects) == {0, 1}


@pytest.mark.parametrize("fn", SORTS)
def test_traces_are_deterministic(fn):
    a, _ = run(fn, [5, 2, 5, 1, 4])
    b, _ = run(fn, [5, 2, 5, 1, 4])
    assert a == b
    assert a.to_list() == b.to_list()


def test_unknown_order_is_rejected():
    with pytest.raises(ValueError):
        run(bubble_sort, [2, 1], "sideways")


@pytest.mark.parametrize("fn", SORTS)
@pytest.mark.parametrize("values, order", [([1, 2, 2, 5], "ascending"), ([9, 4, 4, 0], "descending")])
def test_already_sorted_input_opens_with_notice(fn, values, order):
    notices = []
    gen = fn(values, order, notices)
    first = next(gen)
    assert first.kind is StepKind.NOTICE
    assert first.payload["code"] == "AlreadySortedInput"
    assert first.payload["instruction"] == notices[0].instruction
    assert isinstance(notices[0], AlreadySortedInput)
    assert order in first.narrative


@pytest.mark.parametrize("fn", SORTS)
def test_opposite_order_input_has_no_notice(fn):
    notices = []
    trace, result = run_with_notices(fn, [1, 2, 3], "descending", notices)
    assert notices == []
    assert StepKind.NOTICE not in trace.kinds()
    assert result["sorted_array"] == [3, 2, 1]


def run_with_notices(fn, values, order, notices):
    return run(lambda v, o: fn(v, o, notices), values, order)


def test_recorder_counts_already_sorted_notice():
    rec = Recorder()
    result = rec.record("bubble_sort", values="1, 2, 3")
    assert [n.code for n in result.notices] == ["AlreadySortedInput"]
    assert rec.metrics.notices == 1
    assert result.artifact["sorted_array"] == [1, 2, 3]
