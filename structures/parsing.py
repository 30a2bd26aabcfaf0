"""
parsing.py — Validated Primitives
==================================
Turns caller input (comma-separated text or an already-split list) into
the typed values the trace generators expect.

    parse_elements("10, 2, 50")  → [10, 2, 50]     (array algorithms, 2..50)
    parse_values("50,25,75")     → [50, 25, 75]    (tree / list builds, ≥ 1)
    parse_number("4.5")          → 4.5

Integral tokens become ints so narrations read "5", not "5.0".
Nothing here touches the structure currently loaded: a failed parse
raises before the caller has a chance to overwrite anything.
"""

import math
from typing import Iterable, List, Union

from structures.errors import InvalidElementInput

MIN_ELEMENTS = 2
MAX_ELEMENTS = 50

Number = Union[int, float]


def parse_number(token) -> Number:
    """Parse one numeric token; bool and non-finite values are rejected."""
    if isinstance(token, bool):
        raise InvalidElementInput(f"'{token}' is not a number.")
    if isinstance(token, (int, float)):
        value = token
    else:
        text = str(token).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InvalidElementInput(f"'{text}' is not a number.") from None
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidElementInput(f"'{token}' is not a finite number.")
        if value.is_integer():
            value = int(value)
    return value


def _tokens(raw) -> List:
    if isinstance(raw, str):
        if not raw.strip():
            return []
        return [t for t in raw.split(",")]
    if isinstance(raw, Iterable):
        return list(raw)
    raise InvalidElementInput(f"Expected a list of numbers, got {type(raw).__name__}.")


def parse_elements(raw) -> List[Number]:
    """Element sequence for sorting / searching, bounded to [MIN_ELEMENTS, MAX_ELEMENTS]."""
    values = [parse_number(t) for t in _tokens(raw)]
    validate_elements(values)
    return values


def validate_elements(values: List[Number]) -> None:
    if not (MIN_ELEMENTS <= len(values) <= MAX_ELEMENTS):
        raise InvalidElementInput(
            f"Got {len(values)} element(s); between {MIN_ELEMENTS} and "
            f"{MAX_ELEMENTS} are required."
        )
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise InvalidElementInput(f"'{v}' is not a finite number.")


def parse_values(raw) -> List[Number]:
    """Values for tree / linked-list builds: any count ≥ 1."""
    values = [parse_number(t) for t in _tokens(raw)]
    if not values:
        raise InvalidElementInput(
            "No values given.",
            "Use comma-separated numbers, e.g. 50, 25, 75.",
        )
    return values
