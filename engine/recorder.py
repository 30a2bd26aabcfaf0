"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps) BEFORE any playback starts,
then computes the metrics the UI shows beside the animation.

Usage:
    rec = Recorder()
    result  = rec.record("dijkstra", graph=g, start="A", end="D")
    metrics = rec.metrics            # the analytics card
    rec.export()                     # JSON-ready snapshot for the API

Inputs are validated here, per algorithm family, so a trace generator
only ever sees well-formed data.  Every failure is a VisualizerError.

PathNotFound is the one error a generator raises itself.  The steps
produced before it (the exploration) are attached to the exception as
`exc.trace` and the exception is re-raised.
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.sorting import SortOrder
from algorithms.step import Step, StepKind, Trace, TraceResult, WRITE_KINDS
from structures.bst import BinarySearchTree
from structures.errors import (
    InvalidElementInput,
    MissingTargetNode,
    NoStructureLoaded,
    PathNotFound,
    UnknownAlgorithm,
    UnknownStartNode,
)
from structures.graph import Graph
from structures.linked_list import LinkedList
from structures.parsing import parse_elements, parse_number, parse_values

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics: what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    total_steps:   int   = 0          # number of Steps yielded
    comparisons:   int   = 0
    swaps:         int   = 0
    writes:        int   = 0          # swap + shift + place + overwrite
    finalized:     int   = 0          # indices locked into their final position
    visited:       int   = 0          # VISIT steps (graph / tree traversals)
    notices:       int   = 0
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_metrics(info: AlgoInfo, trace: Trace, notices: int = 0, wall_ms: float = 0.0) -> RunMetrics:
    counts: Dict[StepKind, int] = {}
    for s in trace:
        counts[s.kind] = counts.get(s.kind, 0) + 1

    return RunMetrics(
        algo_key=info.key,
        algo_label=info.label,
        total_steps=len(trace),
        comparisons=counts.get(StepKind.COMPARE, 0),
        swaps=counts.get(StepKind.SWAP, 0),
        writes=sum(counts.get(k, 0) for k in WRITE_KINDS),
        finalized=counts.get(StepKind.FINALIZED, 0),
        visited=counts.get(StepKind.VISIT, 0),
        notices=notices,
        wall_time_ms=round(wall_ms, 2),
    )


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : TraceResult of the last successful run.
        metrics : RunMetrics of the last successful run.
    """

    def __init__(self):
        self.result:  Optional[TraceResult] = None
        self.metrics: Optional[RunMetrics]  = None

    def record(self, key: str, **inputs) -> TraceResult:
        """Validate inputs, exhaust the generator, compute metrics."""
        info = get_algorithm(key)
        if info is None:
            raise UnknownAlgorithm(f"Unknown algorithm: '{key}'.")

        kwargs = self._prepare(info, inputs)
        notices: List[Any] = []
        if info.emits_notices:
            kwargs["notices"] = notices

        steps: List[Step] = []
        started = time.monotonic()
        gen = info.fn(**kwargs)
        try:
            while True:
                steps.append(next(gen))
        except StopIteration as stop:
            artifact = stop.value or {}
        except PathNotFound as exc:
            exc.trace = Trace(steps)
            log.info("%s: %s (after %d steps)", key, exc.message, len(steps))
            raise
        wall_ms = (time.monotonic() - started) * 1000

        trace = Trace(steps)
        self.result  = TraceResult(algorithm=key, trace=trace, artifact=artifact, notices=tuple(notices))
        self.metrics = compute_metrics(info, trace, len(notices), wall_ms)
        log.debug("recorded %s: %d steps in %.2f ms", key, len(trace), wall_ms)
        return self.result

    def export(self) -> Dict[str, Any]:
        """JSON-ready snapshot of the last run."""
        if self.result is None:
            raise RuntimeError("Call record() first.")
        out = self.result.to_dict()
        out["metrics"] = self.metrics.to_dict()
        return out

    # ------------------------------------------------------------------
    # Input validation, per family
    # ------------------------------------------------------------------
    def _prepare(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        prepare = getattr(self, f"_prepare_{info.family}")
        return prepare(info, inputs)

    def _prepare_sorting(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        order = inputs.get("order") or SortOrder.ASCENDING.value
        try:
            order = SortOrder(order).value
        except ValueError:
            raise InvalidElementInput(
                f"Unknown sort order '{order}'.", "Use 'ascending' or 'descending'."
            ) from None
        return {"values": parse_elements(inputs.get("values", [])), "order": order}

    def _prepare_searching(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        values = parse_elements(inputs.get("values", []))
        target = inputs.get("target")
        if target is None or (isinstance(target, str) and not target.strip()):
            raise InvalidElementInput("No target value given.", "Enter the number to search for.")
        return {"values": values, "target": parse_number(target)}

    def _prepare_graph(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        graph = inputs.get("graph")
        if not isinstance(graph, Graph):
            raise NoStructureLoaded("No graph loaded.", "Load a graph before running an algorithm.")

        start = str(inputs.get("start") or "").strip()
        if not graph.has_node(start):
            raise UnknownStartNode(f"Start node '{start}' is not in the graph.")
        kwargs: Dict[str, Any] = {"graph": graph, "start": start}

        if info.needs_target:
            end = str(inputs.get("end") or "").strip()
            if not end:
                raise MissingTargetNode(f"{info.label} needs an end node.")
            if not graph.has_node(end):
                raise MissingTargetNode(
                    f"End node '{end}' is not in the graph.",
                    "Choose one of the nodes present in the loaded graph as the end node.",
                )
            kwargs["end"] = end

        if info.has_heuristic and inputs.get("heuristic") is not None:
            kwargs["heuristic"] = inputs["heuristic"]
        return kwargs

    def _prepare_tree(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        if info.key == "tree_build":
            return {"values": parse_values(inputs.get("values", []))}

        tree = inputs.get("tree")
        if not isinstance(tree, BinarySearchTree):
            raise NoStructureLoaded("No tree built.", "Build a tree first.")
        if info.key in ("tree_insert", "tree_search"):
            return {"tree": tree, "value": self._value(inputs)}
        return {"tree": tree}

    def _prepare_list(self, info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
        if info.key == "list_build":
            return {
                "values": parse_values(inputs.get("values", [])),
                "doubly": bool(inputs.get("doubly", False)),
            }

        lst = inputs.get("lst")
        if not isinstance(lst, LinkedList):
            raise NoStructureLoaded("No linked list built.", "Build a linked list first.")
        return {"lst": lst, "value": self._value(inputs)}

    @staticmethod
    def _value(inputs: Dict[str, Any]):
        value = inputs.get("value")
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidElementInput("No value given.", "Enter a number.")
        return parse_number(value)
