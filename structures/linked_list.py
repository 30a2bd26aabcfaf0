"""
linked_list.py — Singly / Doubly Linked List (arena)
=====================================================
Nodes are kept in a dict keyed by a stable integer id; `next` / `prev`
hold ids, never object references.  The list is built by tail-append
only.

A singly list never sets `prev`.  A doubly list keeps `prev` consistent
on every structural change, including head removal, where the new head's
`prev` becomes None.
"""

import itertools
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional


@dataclass
class ListNode:
    id:    int
    value: float
    next:  Optional[int] = None
    prev:  Optional[int] = None


class LinkedList:
    """
    Attributes:
        doubly : True → nodes carry backward links.
        head   : id of the first node (None when empty).
        tail   : id of the last node.
    """

    def __init__(self, doubly: bool = False):
        self.doubly = doubly
        self._id_iter = itertools.count()
        self.nodes: Dict[int, ListNode] = {}
        self.head:  Optional[int]       = None
        self.tail:  Optional[int]       = None

    @classmethod
    def from_values(cls, values: Iterable[float], doubly: bool = False) -> "LinkedList":
        lst = cls(doubly=doubly)
        for v in values:
            lst.append(v)
        return lst

    @property
    def kind(self) -> str:
        return "doubly" if self.doubly else "singly"

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: int) -> ListNode:
        return self.nodes[node_id]

    def append(self, value) -> int:
        node = ListNode(id=next(self._id_iter), value=value)
        if self.tail is None:
            self.head = node.id
        else:
            self.nodes[self.tail].next = node.id
            if self.doubly:
                node.prev = self.tail
        self.nodes[node.id] = node
        self.tail = node.id
        return node.id

    def iter_nodes(self) -> Iterator[ListNode]:
        current = self.head
        while current is not None:
            node = self.nodes[current]
            yield node
            current = node.next

    def values(self) -> List[float]:
        return [n.value for n in self.iter_nodes()]

    def remove_head(self) -> ListNode:
        if self.head is None:
            raise IndexError("remove from an empty list")
        removed = self.nodes.pop(self.head)
        self.head = removed.next
        if self.head is None:
            self.tail = None
        elif self.doubly:
            self.nodes[self.head].prev = None
        return removed

    def remove_after(self, predecessor: int) -> ListNode:
        """Unlink the node following `predecessor` and relink around it."""
        pred = self.nodes[predecessor]
        if pred.next is None:
            raise IndexError(f"node {predecessor} has no successor")
        removed = self.nodes.pop(pred.next)
        pred.next = removed.next
        if removed.next is None:
            self.tail = predecessor
        elif self.doubly:
            self.nodes[removed.next].prev = predecessor
        return removed

    def copy(self) -> "LinkedList":
        clone = LinkedList(doubly=self.doubly)
        clone.nodes = {nid: ListNode(n.id, n.value, n.next, n.prev) for nid, n in self.nodes.items()}
        clone.head, clone.tail = self.head, self.tail
        clone._id_iter = itertools.count(max(self.nodes, default=-1) + 1)
        return clone

    def to_dict(self) -> dict:
        return {
            "kind":  self.kind,
            "head":  self.head,
            "tail":  self.tail,
            "nodes": [
                {"id": n.id, "value": n.value, "next": n.next, "prev": n.prev}
                for n in self.iter_nodes()
            ],
        }

    def __repr__(self) -> str:
        return f"LinkedList({self.kind}, values={self.values()})"
