"""
graph.py — Graph Model Builder
================================
Turns edge / weight specifications into the adjacency structure every
graph trace generator walks.

    g = Graph.from_text("A-B, A-C, B-D", "A-B:5, A-C:2, B-D:4")
    g.neighbours("A")     → ["B", "C"]
    g.weight("B", "A")    → 5

Design decisions:
  - Undirected only.  Each edge is stored in BOTH adjacency lists and
    both (u, v) / (v, u) weight keys.
  - Node order is first-seen order in the edge specification, and every
    adjacency list keeps insertion order.  BFS / DFS visit order depends
    on this, so it is part of the contract.
  - No self-loops (rejected) and no multi-edges (a repeated edge is
    ignored).
  - Building is all-or-nothing: any malformed token raises
    GraphParseError before a Graph object exists, so a failed load can
    never leave a half-built graph behind.
  - Edges without a weight token weigh 1.  Weight tokens for pairs that
    are not edges are kept in the weight map but add no adjacency.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from structures.errors import GraphParseError

DEFAULT_WEIGHT = 1


class Graph:
    """
    Attributes:
        adjacency : {label: [neighbour_label, …]} in first-seen order.
        weights   : {(u, v): weight} for both directions of every weighted pair.
    """

    def __init__(self):
        self.adjacency: Dict[str, List[str]]              = {}
        self.weights:   Dict[Tuple[str, str], float]      = {}
        self._edges:    List[Tuple[str, str]]             = []

    # ==================================================================
    # BUILDERS
    # ==================================================================
    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Sequence[str]],
        weights: Iterable[Sequence] = (),
    ) -> "Graph":
        """Build from already-split tuples: edges [(u, v)], weights [(u, v, w)]."""
        g = cls()
        parsed_edges   = [_check_edge(e) for e in edges]
        parsed_weights = [_check_weight(w) for w in weights]
        if not parsed_edges:
            raise GraphParseError("The graph has no edges.")
        for u, v in parsed_edges:
            g._add_edge(u, v)
        for u, v, w in parsed_weights:
            g.weights[(u, v)] = w
            g.weights[(v, u)] = w
        return g

    @classmethod
    def from_text(cls, edge_text: str, weight_text: str = "") -> "Graph":
        """
        Parse the textual forms:
            edges   : "A-B, A-C, B-D"
            weights : "A-B:5, A-C:2"     (optional)
        """
        edges   = [_split_edge(tok) for tok in _split_tokens(edge_text)]
        weights = [_split_weight(tok) for tok in _split_tokens(weight_text)]
        return cls.from_edges(edges, weights)

    def _add_edge(self, u: str, v: str) -> None:
        self.adjacency.setdefault(u, [])
        self.adjacency.setdefault(v, [])
        if v in self.adjacency[u]:
            return
        self.adjacency[u].append(v)
        self.adjacency[v].append(u)
        self._edges.append((u, v))

    # ==================================================================
    # QUERIES
    # ==================================================================
    @property
    def nodes(self) -> List[str]:
        return list(self.adjacency.keys())

    @property
    def edges(self) -> List[Tuple[str, str]]:
        return list(self._edges)

    def has_node(self, label: Optional[str]) -> bool:
        return label in self.adjacency

    def neighbours(self, label: str) -> List[str]:
        return list(self.adjacency.get(label, []))

    def weight(self, u: str, v: str) -> float:
        return self.weights.get((u, v), DEFAULT_WEIGHT)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        pairs, seen = [], set()
        for (u, v), w in self.weights.items():
            if frozenset((u, v)) in seen:
                continue
            seen.add(frozenset((u, v)))
            pairs.append([u, v, w])
        return {
            "nodes":   self.nodes,
            "edges":   [list(e) for e in self._edges],
            "weights": pairs,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls.from_edges(data.get("edges", []), data.get("weights", []))

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.adjacency)}, edges={len(self._edges)})"


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------
def _split_tokens(text: str) -> List[str]:
    if not text or not text.strip():
        return []
    return [tok.strip() for tok in text.split(",")]


def _split_edge(token: str) -> Tuple[str, str]:
    parts = token.split("-")
    if len(parts) != 2:
        raise GraphParseError(f"Invalid edge '{token}': expected exactly two labels like A-B.")
    return parts[0], parts[1]


def _split_weight(token: str) -> Tuple[str, str, str]:
    pieces = token.split(":")
    if len(pieces) != 2:
        raise GraphParseError(f"Invalid weight '{token}': expected A-B:5.")
    edge, w = pieces
    parts = edge.split("-")
    if len(parts) != 2:
        raise GraphParseError(f"Invalid weight '{token}': expected exactly two labels like A-B:5.")
    return parts[0], parts[1], w


def _check_edge(edge: Sequence[str]) -> Tuple[str, str]:
    if len(edge) != 2:
        raise GraphParseError(f"Invalid edge {edge!r}: expected exactly two labels.")
    u, v = (str(x).strip() for x in edge)
    if not u or not v:
        raise GraphParseError(f"Invalid edge {edge!r}: empty node label.")
    if u == v:
        raise GraphParseError(f"Invalid edge {u}-{v}: self-loops are not allowed.")
    return u, v


def _check_weight(item: Sequence) -> Tuple[str, str, float]:
    if len(item) != 3:
        raise GraphParseError(f"Invalid weight {item!r}: expected two labels and a weight.")
    u, v = _check_edge(item[:2])
    raw = item[2]
    try:
        if isinstance(raw, bool):
            raise ValueError
        w = float(raw) if not isinstance(raw, (int, float)) else raw
    except (TypeError, ValueError):
        raise GraphParseError(f"Invalid weight for {u}-{v}: '{raw}' is not a number.") from None
    if not math.isfinite(w) or w < 0:
        raise GraphParseError(f"Invalid weight for {u}-{v}: {raw} must be a finite, non-negative number.")
    if isinstance(w, float) and w.is_integer():
        w = int(w)
    return u, v, w
