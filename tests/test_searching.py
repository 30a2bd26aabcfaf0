import math

import pytest

from algorithms.searching import binary_search, is_sorted, linear_search
from algorithms.step import StepKind
from engine.recorder import Recorder
from structures.errors import InvalidElementInput, UnsortedInputForBinarySearch


def drain(gen):
    steps = []
    try:
        while True:
            steps.append(next(gen))
    except StopIteration as stop:
        return steps, stop.value


def test_linear_search_compares_each_index_until_match():
    steps, artifact = drain(linear_search([4, 8, 15, 16], 15))
    compares = [s for s in steps if s.kind is StepKind.COMPARE]
    assert [s.subjects for s in compares] == [(0,), (1,), (2,)]
    assert steps[-1].kind is StepKind.FOUND
    assert artifact == {"found": True, "index": 2, "sequence": [4, 8, 15, 16]}


def test_linear_search_exhausts_on_miss():
    steps, artifact = drain(linear_search([1, 2, 3], 9))
    assert sum(s.kind is StepKind.COMPARE for s in steps) == 3
    assert steps[-1].kind is StepKind.NOT_FOUND
    assert artifact["found"] is False and artifact["index"] is None


def test_linear_search_stops_at_first_duplicate():
    _, artifact = drain(linear_search([5, 7, 7], 7))
    assert artifact["index"] == 1


@pytest.mark.parametrize("n", [2, 3, 7, 8, 16, 33, 50])
def test_binary_search_compare_bound(n):
    values = list(range(0, 2 * n, 2))
    bound = math.ceil(math.log2(n)) + 2
    for target in list(range(-1, 2 * n + 1)):
        steps, artifact = drain(binary_search(values, target))
        compares = [s for s in steps if s.kind is StepKind.COMPARE]
        assert len(compares) <= bound
        assert artifact["found"] == (target in values)


def test_binary_search_emits_range_before_each_compare():
    steps, _ = drain(binary_search([1, 3, 5, 7, 9, 11], 11))
    for i, s in enumerate(steps):
        if s.kind is StepKind.COMPARE:
            assert steps[i - 1].kind is StepKind.RANGE


def test_binary_search_midpoint_and_narrowing():
    steps, artifact = drain(binary_search([1, 3, 5, 7, 9], 9))
    first_compare = next(s for s in steps if s.kind is StepKind.COMPARE)
    assert first_compare.subjects == (2,)
    narrow = next(s for s in steps if s.kind is StepKind.NARROW)
    assert narrow.payload == {"low": 3, "high": 4, "discarded": "left"}
    assert artifact["index"] == 4


def test_binary_search_sorted_input_has_no_notice():
    notices = []
    steps, _ = drain(binary_search([1, 2, 3], 2, notices))
    assert notices == []
    assert all(s.kind is not StepKind.NOTICE for s in steps)


def test_binary_search_auto_sorts_and_says_so():
    notices = []
    steps, artifact = drain(binary_search([9, 1, 5, 3], 5, notices))

    assert len(notices) == 1
    assert isinstance(notices[0], UnsortedInputForBinarySearch)
    assert steps[0].kind is StepKind.NOTICE
    assert steps[0].payload["code"] == "UnsortedInputForBinarySearch"
    assert steps[0].payload["message"] == notices[0].message
    assert steps[0].payload["instruction"] == notices[0].instruction
    assert "sorted automatically" in steps[0].narrative
    assert artifact["sequence"] == [1, 3, 5, 9]

    # after the notice it behaves exactly like a search on the sorted input
    expected, expected_artifact = drain(binary_search([1, 3, 5, 9], 5))
    assert steps[1:] == expected
    assert artifact == expected_artifact


def test_recorder_surfaces_auto_sort_notice():
    rec = Recorder()
    result = rec.record("binary_search", values="10, 2, 7", target=7)
    assert [n.code for n in result.notices] == ["UnsortedInputForBinarySearch"]
    assert rec.metrics.notices == 1
    assert result.artifact["found"] is True


def test_recorder_requires_a_target():
    with pytest.raises(InvalidElementInput):
        Recorder().record("linear_search", values=[1, 2, 3])


def test_recorder_rejects_element_count_out_of_range():
    with pytest.raises(InvalidElementInput):
        Recorder().record("linear_search", values=[1], target=1)
    with pytest.raises(InvalidElementInput):
        Recorder().record("linear_search", values=list(range(51)), target=1)


def test_is_sorted():
    assert is_sorted([1, 1, 2])
    assert not is_sorted([2, 1])
