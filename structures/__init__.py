"""
structures/
-----------
Data layer: the structures trace generators walk, input validation and
the error taxonomy.  Public API:

    from structures import Graph, PriorityQueue, BinarySearchTree, LinkedList
    from structures import parse_elements, parse_values
    from structures.errors import PathNotFound, …
"""

from structures.bst            import BinarySearchTree, TreeNode
from structures.graph          import Graph
from structures.linked_list    import LinkedList, ListNode
from structures.parsing        import (
    MAX_ELEMENTS, MIN_ELEMENTS, parse_elements, parse_number, parse_values, validate_elements,
)
from structures.priority_queue import Entry, PriorityQueue

__all__ = [
    "BinarySearchTree", "TreeNode",
    "Graph",
    "LinkedList",       "ListNode",
    "PriorityQueue",    "Entry",
    "parse_elements",   "parse_values", "parse_number", "validate_elements",
    "MIN_ELEMENTS",     "MAX_ELEMENTS",
]
