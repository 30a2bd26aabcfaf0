import pytest

from algorithms.linked_list import list_build, list_delete, list_search
from algorithms.step import StepKind
from structures.linked_list import LinkedList


def drain(gen):
    steps = []
    try:
        while True:
            steps.append(next(gen))
    except StopIteration as stop:
        return steps, stop.value


def links(lst_dict):
    return [(n["value"], n["next"], n["prev"]) for n in lst_dict["nodes"]]


def test_build_singly_has_no_back_links():
    steps, artifact = drain(list_build([1, 2, 3]))
    assert artifact["values"] == [1, 2, 3]
    assert links(artifact["list"]) == [(1, 1, None), (2, 2, None), (3, None, None)]
    inserts = [s for s in steps if s.kind is StepKind.INSERT]
    assert [s.payload["parent"] for s in inserts] == [None, 0, 1]
    assert all(s.payload["side"] == "next" for s in inserts)


def test_build_doubly_links_both_ways():
    _, artifact = drain(list_build([1, 2, 3], doubly=True))
    assert artifact["list"]["kind"] == "doubly"
    assert links(artifact["list"]) == [(1, 1, None), (2, 2, 0), (3, None, 1)]


def test_search_reports_index():
    lst = LinkedList.from_values([4, 5, 6])
    steps, artifact = drain(list_search(lst, 6))
    assert sum(s.kind is StepKind.COMPARE for s in steps) == 3
    assert artifact == {"found": True, "index": 2}
    _, missing = drain(list_search(lst, 9))
    assert missing == {"found": False, "index": None}


def test_delete_head_of_doubly_list():
    lst = LinkedList.from_values([10, 20, 30], doubly=True)
    steps, artifact = drain(list_delete(lst, 10))

    assert [s.kind for s in steps] == [StepKind.DELETE_HEAD]
    assert steps[0].payload == {"value": 10, "new_head": 1}
    head = artifact["list"]["nodes"][0]
    assert head["value"] == 20 and head["prev"] is None
    assert artifact["values"] == [20, 30]
    assert artifact["deleted"] is True
    # caller's list is untouched
    assert lst.values() == [10, 20, 30]


def test_delete_interior_relinks_both_directions():
    lst = LinkedList.from_values([10, 20, 30], doubly=True)
    steps, artifact = drain(list_delete(lst, 20))

    assert [s.kind for s in steps] == [StepKind.TRAVERSE, StepKind.DELETE]
    assert steps[-1].payload == {"value": 20, "predecessor": 0, "successor": 2}
    assert links(artifact["list"]) == [(10, 2, None), (30, None, 0)]


def test_delete_tail_moves_tail():
    lst = LinkedList.from_values([1, 2, 3])
    steps, artifact = drain(list_delete(lst, 3))
    assert [s.kind for s in steps] == [StepKind.TRAVERSE, StepKind.TRAVERSE, StepKind.DELETE]
    assert artifact["list"]["tail"] == 1
    assert artifact["values"] == [1, 2]


def test_delete_missing_value_changes_nothing():
    lst = LinkedList.from_values([1, 2, 3])
    steps, artifact = drain(list_delete(lst, 7))
    assert steps[-1].kind is StepKind.NOT_FOUND
    assert artifact["deleted"] is False
    assert artifact["values"] == [1, 2, 3]


def test_delete_from_empty_list():
    steps, artifact = drain(list_delete(LinkedList(), 1))
    assert [s.kind for s in steps] == [StepKind.NOT_FOUND]
    assert "empty" in steps[0].narrative
    assert artifact["values"] == []


def test_remove_after_without_successor():
    lst = LinkedList.from_values([1])
    with pytest.raises(IndexError):
        lst.remove_after(0)
