"""
bst.py — Binary Search Tree (arena)
====================================
Unbalanced BST whose nodes live in a flat arena and reference each
other by stable integer id instead of object pointers.  Steps name tree
nodes by these ids, so a trace never depends on transient object
identity.

Duplicates go RIGHT (non-strict comparison); there is no rebalancing,
so sorted input degenerates into a chain.
"""

import itertools
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class TreeNode:
    id:    int
    value: float
    left:  Optional[int] = None
    right: Optional[int] = None


class BinarySearchTree:

    def __init__(self):
        self._id_iter = itertools.count()
        self.nodes: Dict[int, TreeNode] = {}
        self.root:  Optional[int]       = None

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "BinarySearchTree":
        tree = cls()
        for v in values:
            tree.insert(v)
        return tree

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: int) -> TreeNode:
        return self.nodes[node_id]

    def insert(self, value) -> Tuple[int, List[int]]:
        """Returns (new node id, ids of the existing nodes walked past)."""
        path: List[int] = []
        new = TreeNode(id=next(self._id_iter), value=value)

        if self.root is None:
            self.nodes[new.id] = new
            self.root = new.id
            return new.id, path

        current = self.nodes[self.root]
        while True:
            path.append(current.id)
            side = "left" if value < current.value else "right"
            child = getattr(current, side)
            if child is None:
                setattr(current, side, new.id)
                break
            current = self.nodes[child]

        self.nodes[new.id] = new
        return new.id, path

    def copy(self) -> "BinarySearchTree":
        clone = BinarySearchTree()
        clone.nodes = {
            nid: TreeNode(n.id, n.value, n.left, n.right) for nid, n in self.nodes.items()
        }
        clone.root = self.root
        clone._id_iter = itertools.count(max(self.nodes, default=-1) + 1)
        return clone

    def values(self) -> List[float]:
        """Values in insertion (id) order: rebuilding from them gives the same shape."""
        return [self.nodes[nid].value for nid in sorted(self.nodes)]

    def to_dict(self) -> dict:
        return {
            "root":  self.root,
            "nodes": [
                {"id": n.id, "value": n.value, "left": n.left, "right": n.right}
                for n in (self.nodes[nid] for nid in sorted(self.nodes))
            ],
        }

    def __repr__(self) -> str:
        return f"BinarySearchTree(size={len(self)}, root={self.root})"
