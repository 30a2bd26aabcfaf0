"""
step.py — Trace Events
=======================
Every algorithm is a generator that yields Step objects and returns its
final artifact.  A Step is one atomic, narrated event:

    Step(kind=StepKind.COMPARE, subjects=(3, 4),
         payload={"values": (7, 2)}, narrative="Comparing 7 and 2.")

    • kind       – one of the closed StepKind vocabulary shared by ALL algorithms
    • subjects   – positional indices (arrays) or node labels / arena ids
                   (graphs, trees, lists), never object identity
    • payload    – algorithm data; its keys are fixed per kind
    • narrative  – plain-English explanation the UI shows for this step

Design decisions:
  - Step is a frozen dataclass.  Subjects are stored as a tuple and the
    payload as a read-only mapping with lists frozen to tuples, so a
    recorded trace cannot be mutated by the scheduler or the renderer.
  - PAYLOAD_SCHEMA is checked in __post_init__: a generator that emits a
    payload with missing or extra keys fails at generation time, not in
    the renderer.
  - A Trace is the immutable, ordered sequence of Steps of one run.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple


class StepKind(Enum):
    COMPARE     = "compare"
    SWAP        = "swap"
    SHIFT       = "shift"
    PLACE       = "place"
    OVERWRITE   = "overwrite"
    MARK        = "mark"
    FINALIZED   = "finalized"
    RANGE       = "range"
    NARROW      = "narrow"
    FOUND       = "found"
    NOT_FOUND   = "not_found"
    NOTICE      = "notice"
    START       = "start"
    ENQUEUE     = "enqueue"
    VISIT       = "visit"
    UPDATE      = "update"
    STALE       = "stale"
    PATH        = "path"
    INSERT      = "insert"
    TRAVERSE    = "traverse"
    DELETE      = "delete"
    DELETE_HEAD = "delete_head"
    COMPLETE    = "complete"


PAYLOAD_SCHEMA: Dict[StepKind, Tuple[str, ...]] = {
    StepKind.COMPARE:     ("values",),
    StepKind.SWAP:        ("values",),
    StepKind.SHIFT:       ("value",),
    StepKind.PLACE:       ("value", "origin"),
    StepKind.OVERWRITE:   ("value", "origin"),
    StepKind.MARK:        ("role", "value"),
    StepKind.FINALIZED:   ("value",),
    StepKind.RANGE:       ("low", "high"),
    StepKind.NARROW:      ("low", "high", "discarded"),
    StepKind.FOUND:       ("value",),
    StepKind.NOT_FOUND:   ("value",),
    StepKind.NOTICE:      ("code", "message", "instruction"),
    StepKind.START:       ("algorithm",),
    StepKind.ENQUEUE:     ("structure", "frontier"),
    StepKind.VISIT:       ("value", "order"),
    StepKind.UPDATE:      ("distance", "via", "priority"),
    StepKind.STALE:       ("priority", "best"),
    StepKind.PATH:        ("path", "total_weight"),
    StepKind.INSERT:      ("value", "parent", "side"),
    StepKind.TRAVERSE:    ("value",),
    StepKind.DELETE:      ("value", "predecessor", "successor"),
    StepKind.DELETE_HEAD: ("value", "new_head"),
    StepKind.COMPLETE:    (),
}

# kinds that change an array's contents (replayed by engine.replay)
WRITE_KINDS = frozenset({StepKind.SWAP, StepKind.SHIFT, StepKind.PLACE, StepKind.OVERWRITE})


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind      : StepKind tag.
        subjects  : Indices or labels this step is about, in order.
        payload   : Kind-specific data, keys fixed by PAYLOAD_SCHEMA.
        narrative : Human-readable "what just happened" text.
    """

    kind:      StepKind
    subjects:  Tuple[Any, ...]       = ()
    payload:   Mapping[str, Any]     = field(default_factory=dict)
    narrative: str                   = ""

    def __post_init__(self):
        if not isinstance(self.kind, StepKind):
            raise TypeError(f"Step kind must be a StepKind, got {self.kind!r}")
        expected = set(PAYLOAD_SCHEMA[self.kind])
        got = set(self.payload)
        if got != expected:
            raise ValueError(
                f"{self.kind.value} payload must have keys {sorted(expected)}, got {sorted(got)}"
            )
        object.__setattr__(self, "subjects", _freeze(list(self.subjects)))
        object.__setattr__(self, "payload", _freeze(dict(self.payload)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":      self.kind.value,
            "subjects":  _thaw(self.subjects),
            "payload":   _thaw(self.payload),
            "narrative": self.narrative,
        }


def step(kind: StepKind, subjects=(), narrative: str = "", **payload) -> Step:
    """Shorthand used inside generators: step(StepKind.SWAP, [i, j], "…", values=(a, b))."""
    return Step(kind=kind, subjects=tuple(subjects), payload=payload, narrative=narrative)


class Trace(Sequence):
    """Immutable ordered sequence of Steps produced by one algorithm run."""

    __slots__ = ("_steps",)

    def __init__(self, steps=()):
        self._steps: Tuple[Step, ...] = tuple(steps)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return Trace(self._steps[idx])
        return self._steps[idx]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __eq__(self, other) -> bool:
        return isinstance(other, Trace) and self._steps == other._steps

    __hash__ = None

    def prefix(self, k: int) -> "Trace":
        return Trace(self._steps[:k])

    def kinds(self) -> List[StepKind]:
        return [s.kind for s in self._steps]

    def of_kind(self, *kinds: StepKind) -> List[Step]:
        return [s for s in self._steps if s.kind in kinds]

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self._steps]

    def __repr__(self) -> str:
        return f"Trace(steps={len(self)})"


@dataclass(frozen=True)
class TraceResult:
    """
    What one recorded run hands to the caller.

    Attributes:
        algorithm : Registry key of the algorithm that produced the trace.
        trace     : The full Trace.
        artifact  : Final artifact (sorted array, found flag, path, order, …).
        notices   : Non-fatal conditions surfaced to the user (e.g. auto-sort).
    """

    algorithm: str
    trace:     Trace
    artifact:  Dict[str, Any]                  = field(default_factory=dict)
    notices:   Tuple[Any, ...]                 = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "steps":     self.trace.to_list(),
            "artifact":  self.artifact,
            "notices":   [n.to_dict() for n in self.notices],
        }
