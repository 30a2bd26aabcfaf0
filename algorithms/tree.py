"""
tree.py — Binary Search Tree Trace Generators
===============================================
Insertion, search and the three depth-first traversals over the arena
BST in structures.bst.  Subjects are node ids, never object references.

  • tree_build / tree_insert  – COMPARE along the descent, then INSERT
                                (side = "root" | "left" | "right")
  • tree_search               – COMPARE per visited node, then FOUND / NOT_FOUND
  • inorder / preorder / postorder
                              – VISIT per node; payload "order" is the
                                visited-values accumulator so far

Insertion works on a copy: the caller's tree is never mutated by a
trace generator.
"""

from typing import Generator, Iterable, List, Optional

from algorithms.step import Step, StepKind, step
from structures.bst import BinarySearchTree

TreeGenerator = Generator[Step, None, dict]


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------
def _insert(tree: BinarySearchTree, value) -> TreeGenerator:
    new_id, path = tree.insert(value)

    for node_id in path:
        current = tree.node(node_id)
        go = "left" if value < current.value else "right"
        yield step(
            StepKind.COMPARE, [node_id],
            f"Comparing {value} with {current.value}: go {go}.",
            values=(value, current.value),
        )

    if not path:
        yield step(
            StepKind.INSERT, [new_id],
            f"Tree is empty. {value} becomes the root.",
            value=value, parent=None, side="root",
        )
        return

    parent = tree.node(path[-1])
    side   = "left" if parent.left == new_id else "right"
    yield step(
        StepKind.INSERT, [new_id],
        f"Inserting {value} as the {side} child of {parent.value}.",
        value=value, parent=parent.id, side=side,
    )


def tree_build(values: Iterable[float]) -> TreeGenerator:
    """Build a BST from scratch by repeated unbalanced insertion."""
    tree = BinarySearchTree()
    for v in values:
        yield from _insert(tree, v)
    yield step(StepKind.COMPLETE, [], f"Tree built with {len(tree)} nodes.")
    return {"tree": tree.to_dict(), "values": tree.values()}


def tree_insert(tree: BinarySearchTree, value) -> TreeGenerator:
    tree = tree.copy()
    yield from _insert(tree, value)
    yield step(StepKind.COMPLETE, [], f"Inserted {value}.")
    return {"tree": tree.to_dict(), "values": tree.values()}


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def tree_search(tree: BinarySearchTree, value) -> TreeGenerator:
    current: Optional[int] = tree.root

    while current is not None:
        node = tree.node(current)
        yield step(
            StepKind.COMPARE, [node.id],
            f"Searching for {value}. Comparing with current node {node.value}.",
            values=(value, node.value),
        )
        if value == node.value:
            yield step(StepKind.FOUND, [node.id], f"Value {value} found!", value=value)
            return {"found": True, "node": node.id}
        current = node.left if value < node.value else node.right

    yield step(StepKind.NOT_FOUND, [], f"Value {value} not found in the tree.", value=value)
    return {"found": False, "node": None}


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------
def _visit(tree: BinarySearchTree, node_id: int, order: List[float], label: str) -> Step:
    node = tree.node(node_id)
    order.append(node.value)
    return step(
        StepKind.VISIT, [node_id],
        f"Visiting node {node.value} ({label}).",
        value=node.value, order=order,
    )


def _inorder(tree, node_id, order) -> Generator[Step, None, None]:
    if node_id is None:
        return
    node = tree.node(node_id)
    yield from _inorder(tree, node.left, order)
    yield _visit(tree, node_id, order, "In-order")
    yield from _inorder(tree, node.right, order)


def _preorder(tree, node_id, order) -> Generator[Step, None, None]:
    if node_id is None:
        return
    node = tree.node(node_id)
    yield _visit(tree, node_id, order, "Pre-order")
    yield from _preorder(tree, node.left, order)
    yield from _preorder(tree, node.right, order)


def _postorder(tree, node_id, order) -> Generator[Step, None, None]:
    if node_id is None:
        return
    node = tree.node(node_id)
    yield from _postorder(tree, node.left, order)
    yield from _postorder(tree, node.right, order)
    yield _visit(tree, node_id, order, "Post-order")


def inorder(tree: BinarySearchTree) -> TreeGenerator:
    order: List[float] = []
    yield from _inorder(tree, tree.root, order)
    yield step(StepKind.COMPLETE, [], "In-order traversal complete.")
    return {"order": order}


def preorder(tree: BinarySearchTree) -> TreeGenerator:
    order: List[float] = []
    yield from _preorder(tree, tree.root, order)
    yield step(StepKind.COMPLETE, [], "Pre-order traversal complete.")
    return {"order": order}


def postorder(tree: BinarySearchTree) -> TreeGenerator:
    order: List[float] = []
    yield from _postorder(tree, tree.root, order)
    yield step(StepKind.COMPLETE, [], "Post-order traversal complete.")
    return {"order": order}
