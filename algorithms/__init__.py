"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, fn, family, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The Recorder reads `family` to know
which inputs to validate and how to call `fn`; the Flask catalogue reads
the label / complexity / description card.  Adding an algorithm is:
write the generator, add one entry here.

Call conventions per family (keyword arguments):
    sorting    fn(values, order[, notices])
    searching  fn(values, target[, notices])
    graph      fn(graph, start[, end][, heuristic])
    tree       fn(values) | fn(tree, value) | fn(tree)
    list       fn(values, doubly) | fn(lst, value)
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.sorting     import (
    bubble_sort as _bubble, selection_sort as _selection, insertion_sort as _insertion,
    quick_sort as _quick, merge_sort as _merge, heap_sort as _heap,
)
from algorithms.searching   import linear_search as _linear, binary_search as _binary
from algorithms.bfs         import bfs           as _bfs
from algorithms.dfs         import dfs           as _dfs
from algorithms.dijkstra    import dijkstra      as _dijkstra
from algorithms.astar       import astar         as _astar
from algorithms.tree        import (
    tree_build as _tree_build, tree_insert as _tree_insert, tree_search as _tree_search,
    inorder as _inorder, preorder as _preorder, postorder as _postorder,
)
from algorithms.linked_list import list_build as _list_build, list_search as _list_search, list_delete as _list_delete

FAMILIES = ("sorting", "searching", "graph", "tree", "list")


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function
    family:           str                    # one of FAMILIES
    needs_target:     bool     = False       # pathfinders: end node required
    has_heuristic:    bool     = False       # A*: accepts a heuristic callable
    emits_notices:    bool     = False       # sorts, binary search: take a `notices` list
    complexity_time:  str      = ""          # e.g. "O(V + E)"
    complexity_space: str      = ""          # e.g. "O(V)"
    description:      str      = ""          # text for the UI card

    def card(self) -> dict:
        """Serialisable view for the catalogue (everything except `fn`)."""
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "needs_target":     self.needs_target,
            "has_heuristic":    self.has_heuristic,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # --- sorting ------------------------------------------------------------
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, family="sorting",
        emits_notices=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="A simple comparison-based algorithm that repeatedly steps through the list, "
                    "compares adjacent elements, and swaps them if they are in the wrong order. "
                    "It is an in-place sort.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection, family="sorting",
        emits_notices=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="An in-place comparison sort that finds the minimum element from the unsorted "
                    "portion of the list and swaps it with the first element of that portion. "
                    "This process is repeated until the list is sorted.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=_insertion, family="sorting",
        emits_notices=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Builds the final sorted array one item at a time, moving each element into "
                    "its correct position within the already sorted part of the list. "
                    "It is efficient for small datasets.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_quick, family="sorting",
        emits_notices=True,
        complexity_time="O(n log n) (Average)", complexity_space="O(log n)",
        description="A divide-and-conquer algorithm that picks an element as a pivot and "
                    "partitions the array around it. Typically the fastest sort in practice, "
                    "with a worst case of O(n²).",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge, family="sorting",
        emits_notices=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="A divide-and-conquer algorithm that divides the array into halves, sorts "
                    "them recursively, and then merges the two sorted halves. It is a stable "
                    "sort with a guaranteed O(n log n) time complexity.",
    ),

    "heap_sort": AlgoInfo(
        key="heap_sort", label="Heap Sort", fn=_heap, family="sorting",
        emits_notices=True,
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="An in-place sort that treats the array as a binary heap, then repeatedly "
                    "extracts the root and places it at the end of the array.",
    ),

    # --- searching ----------------------------------------------------------
    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=_linear, family="searching",
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks each element sequentially until a match is found or the whole list "
                    "has been searched. Works on both sorted and unsorted data.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_binary, family="searching",
        emits_notices=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Works on a sorted list by repeatedly halving the search interval: lower "
                    "half if the key is smaller than the middle element, upper half otherwise.",
    ),

    # --- graph --------------------------------------------------------------
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, family="graph",
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores a graph layer by layer, visiting all neighbors of a node before "
                    "moving to the next level. Finds shortest paths by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, family="graph",
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Traverses as far as possible along each branch before backtracking. "
                    "Does NOT guarantee shortest paths.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, family="graph",
        needs_target=True,
        complexity_time="O(E log V)", complexity_space="O(V + E)",
        description="Finds shortest paths in a graph with non-negative weights, always visiting "
                    "the unvisited node with the smallest known distance next.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, family="graph",
        needs_target=True, has_heuristic=True,
        complexity_time="O(E)", complexity_space="O(V)",
        description="Dijkstra plus a heuristic estimate of the remaining cost. Optimal only "
                    "when the heuristic never overestimates.",
    ),

    # --- tree ---------------------------------------------------------------
    "tree_build": AlgoInfo(
        key="tree_build", label="Binary Search Tree", fn=_tree_build, family="tree",
        complexity_time="O(log n) (Average)", complexity_space="O(n)",
        description="Each key is greater than all keys in its left sub-tree and not less than "
                    "all keys in its right sub-tree, which keeps search and insertion efficient.",
    ),

    "tree_insert": AlgoInfo(
        key="tree_insert", label="BST Insert", fn=_tree_insert, family="tree",
        complexity_time="O(log n) (Average)", complexity_space="O(1)",
        description="Descend from the root comparing at each node and attach the new value as "
                    "a leaf. Duplicates go right; no rebalancing.",
    ),

    "tree_search": AlgoInfo(
        key="tree_search", label="BST Search", fn=_tree_search, family="tree",
        complexity_time="O(log n) (Average)", complexity_space="O(1)",
        description="Descend from the root, going left for smaller values and right otherwise, "
                    "until the value is found or a leaf is passed.",
    ),

    "inorder": AlgoInfo(
        key="inorder", label="In-order Traversal", fn=_inorder, family="tree",
        complexity_time="O(n)", complexity_space="O(n) (Worst-case)",
        description="Visits the left child, then the root, then the right child. Prints the "
                    "values of a BST in sorted order.",
    ),

    "preorder": AlgoInfo(
        key="preorder", label="Pre-order Traversal", fn=_preorder, family="tree",
        complexity_time="O(n)", complexity_space="O(n) (Worst-case)",
        description="Visits the root, then the left child, then the right child. Useful for "
                    "creating a copy of a tree.",
    ),

    "postorder": AlgoInfo(
        key="postorder", label="Post-order Traversal", fn=_postorder, family="tree",
        complexity_time="O(n)", complexity_space="O(n) (Worst-case)",
        description="Visits the left child, then the right child, then the root. Children are "
                    "handled before their parent, as when deleting a tree.",
    ),

    # --- linked list --------------------------------------------------------
    "list_build": AlgoInfo(
        key="list_build", label="Linked List Build", fn=_list_build, family="list",
        complexity_time="O(1) (Append)", complexity_space="O(n)",
        description="Nodes hold a value and a pointer to the next node; a doubly linked list "
                    "adds a pointer to the previous node for backward traversal.",
    ),

    "list_search": AlgoInfo(
        key="list_search", label="Linked List Search", fn=_list_search, family="list",
        complexity_time="O(n) (Search)", complexity_space="O(1)",
        description="Walk from the head comparing each node until the value is found or the "
                    "list ends.",
    ),

    "list_delete": AlgoInfo(
        key="list_delete", label="Linked List Delete", fn=_list_delete, family="list",
        complexity_time="O(n)", complexity_space="O(1)",
        description="Deleting the head just moves the head pointer; any other node is found by "
                    "scanning for its predecessor, which is then linked to the successor.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


__all__ = [
    "AlgoInfo",
    "FAMILIES",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
]
