"""
errors.py — Error Taxonomy
===========================
Every user-facing failure the engine knows about.  Each error carries
a short `message` (what went wrong) and an `instruction` (what the user
should do next), which is exactly what the UI shows in its explanation
box.

Validation raises these BEFORE a trace generator starts.  Once a
generator is running it is assumed total, with one exception:
PathNotFound, which the pathfinders raise from path reconstruction.
"""

from typing import Any, Dict, Optional


class VisualizerError(Exception):
    """
    Attributes:
        code        : Stable machine-readable name (the class name).
        message     : What went wrong.
        instruction : How to fix it.
        status      : HTTP status the Flask layer answers with.
    """

    status: int = 400
    default_instruction: str = ""

    def __init__(self, message: str, instruction: Optional[str] = None):
        super().__init__(message)
        self.message     = message
        self.instruction = instruction or self.default_instruction

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error":       self.code,
            "message":     self.message,
            "instruction": self.instruction,
        }


class InvalidElementInput(VisualizerError):
    default_instruction = "Use comma-separated numbers (min 2, max 50 elements)."


class GraphParseError(VisualizerError):
    default_instruction = 'Use "A-B, C-D" for edges and "A-B:5, B-C:2" for weights.'


class UnknownStartNode(VisualizerError):
    default_instruction = "Choose one of the nodes present in the loaded graph."


class MissingTargetNode(VisualizerError):
    default_instruction = "Enter a target node for the pathfinding algorithm."


class PathNotFound(VisualizerError):
    """
    Raised by path reconstruction when the predecessor chain from the
    end node never reaches the start node.  The Recorder attaches the
    exploration steps generated so far as `trace`.
    """

    status = 404
    default_instruction = "Pick an end node that is connected to the start node."

    def __init__(self, start: str, end: str, instruction: Optional[str] = None):
        super().__init__(f"Node '{end}' is not reachable from '{start}'.", instruction)
        self.start = start
        self.end   = end
        self.trace: tuple = ()


class UnsortedInputForBinarySearch(VisualizerError):
    """Not fatal: recorded as a notice when binary search sorts its input."""

    default_instruction = "Binary Search requires a sorted array; it was sorted automatically."


class AlreadySortedInput(VisualizerError):
    """Not fatal: recorded as a notice when a sort is given input already in order."""

    default_instruction = "No element will move; load an unsorted array to see the sort at work."


class UnknownAlgorithm(VisualizerError):
    default_instruction = "Pick an algorithm from the catalogue."


class NoStructureLoaded(VisualizerError):
    status = 409
    default_instruction = "Load or build the structure first."


__all__ = [
    "VisualizerError",
    "InvalidElementInput",
    "GraphParseError",
    "UnknownStartNode",
    "MissingTargetNode",
    "PathNotFound",
    "UnsortedInputForBinarySearch",
    "AlreadySortedInput",
    "UnknownAlgorithm",
    "NoStructureLoaded",
]
