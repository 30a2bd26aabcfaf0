"""
linked_list.py — Linked List Trace Generators
===============================================
Build, search and delete over the arena list in structures.linked_list.
Subjects are node ids.

Delete has two distinct cases:
  • head      – DELETE_HEAD; for a doubly list the new head's prev is cleared
  • interior  – TRAVERSE per node while scanning for the predecessor, then
                DELETE with the predecessor / successor ids that were relinked
A value that is not present yields NOT_FOUND and the list is unchanged.

Delete works on a copy of the caller's list.
"""

from typing import Generator, Iterable

from algorithms.step import Step, StepKind, step
from structures.linked_list import LinkedList

ListGenerator = Generator[Step, None, dict]


def list_build(values: Iterable[float], doubly: bool = False) -> ListGenerator:
    lst = LinkedList(doubly=doubly)
    for v in values:
        previous_tail = lst.tail
        node_id = lst.append(v)
        if previous_tail is None:
            narrative = f"List is empty. {v} becomes the head."
        else:
            narrative = f"Appending {v} after {lst.node(previous_tail).value}."
        yield step(
            StepKind.INSERT, [node_id], narrative,
            value=v, parent=previous_tail, side="next",
        )
    yield step(StepKind.COMPLETE, [], f"{lst.kind.capitalize()} linked list built with {len(lst)} nodes.")
    return {"list": lst.to_dict(), "values": lst.values()}


def list_search(lst: LinkedList, value) -> ListGenerator:
    for index, node in enumerate(lst.iter_nodes()):
        yield step(
            StepKind.COMPARE, [node.id],
            f"Searching for {value}. Comparing with node {node.value} at index {index}.",
            values=(value, node.value),
        )
        if node.value == value:
            yield step(StepKind.FOUND, [node.id], f"Value {value} found!", value=value)
            return {"found": True, "index": index}

    yield step(StepKind.NOT_FOUND, [], f"Value {value} not found in the list.", value=value)
    return {"found": False, "index": None}


def list_delete(lst: LinkedList, value) -> ListGenerator:
    lst = lst.copy()

    if lst.head is None:
        yield step(StepKind.NOT_FOUND, [], f"List is empty. Cannot delete {value}.", value=value)
        return {"deleted": False, "list": lst.to_dict(), "values": lst.values()}

    head = lst.node(lst.head)
    if head.value == value:
        removed = lst.remove_head()
        yield step(
            StepKind.DELETE_HEAD, [removed.id],
            f"Deleting head node {value}.",
            value=value, new_head=lst.head,
        )
        return {"deleted": True, "list": lst.to_dict(), "values": lst.values()}

    current = head
    while current.next is not None:
        yield step(
            StepKind.TRAVERSE, [current.id],
            f"Traversing to find the node before {value}.",
            value=current.value,
        )
        following = lst.node(current.next)
        if following.value == value:
            removed = lst.remove_after(current.id)
            yield step(
                StepKind.DELETE, [removed.id],
                f"Deleting node {value}.",
                value=value, predecessor=current.id, successor=removed.next,
            )
            return {"deleted": True, "list": lst.to_dict(), "values": lst.values()}
        current = following

    yield step(StepKind.NOT_FOUND, [], f"Value {value} not found in the list.", value=value)
    return {"deleted": False, "list": lst.to_dict(), "values": lst.values()}
