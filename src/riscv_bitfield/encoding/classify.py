"""Format classifier: guesses the base-ISA format letter from operand positions."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class FormatTag(Enum):
    """Standard RISC-V base instruction formats."""

    I = "I"  # noqa: E741
    R = "R"
    S = "S"
    U = "U"
    J = "J"
    B = "B"


# Ordered predicates: (tag, {variable name: exact location string}).
# The first predicate whose every location matches wins.
# S and B carry the same condition, so B is never returned (see shadowed_tags).
_PREDICATES: list[tuple[FormatTag, dict[str, str]]] = [
    (FormatTag.I, {"xd": "11-7", "xs1": "19-15", "imm": "31-20"}),
    (FormatTag.R, {"xd": "11-7", "xs1": "19-15", "xs2": "24-20"}),
    (FormatTag.S, {"xs2": "24-20", "xs1": "19-15", "imm": "11-7"}),
    (FormatTag.U, {"imm": "31-12", "xd": "11-7"}),
    (FormatTag.J, {"imm": "31-12", "xs1": "19-15"}),
    (FormatTag.B, {"xs2": "24-20", "xs1": "19-15", "imm": "11-7"}),
]


def variable_locations(encoding: Mapping[str, Any] | None) -> dict[str, str] | None:
    """Map variable name -> location string for a flat encoding.

    Returns None when the encoding has no ``variables`` list, which is
    also the case for encodings split by sub-architecture.
    """
    if not encoding or not isinstance(encoding.get("variables"), list):
        return None
    return {
        str(v.get("name")): str(v.get("location"))
        for v in encoding["variables"]
        if isinstance(v, Mapping)
    }


def classify_locations(locations: Mapping[str, str]) -> FormatTag | None:
    """Return the first format whose operand positions all match exactly."""
    for tag, expected in _PREDICATES:
        if all(locations.get(name) == loc for name, loc in expected.items()):
            return tag
    return None


def detect_encoding_type(encoding: Mapping[str, Any] | None) -> FormatTag | None:
    """Classify an instruction encoding into a format tag, or None."""
    locations = variable_locations(encoding)
    if locations is None:
        return None
    return classify_locations(locations)


def shadowed_tags() -> set[FormatTag]:
    """Tags that can never be returned because an earlier predicate is identical."""
    seen: list[dict[str, str]] = []
    shadowed: set[FormatTag] = set()
    for tag, expected in _PREDICATES:
        if expected in seen:
            shadowed.add(tag)
        seen.append(expected)
    return shadowed
