"""Field resolver: merges variable fields and constant match bits into one field list."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .location import BitRange, parse_location
from .match import (
    DONT_CARE,
    FUNCT3_SPAN,
    FUNCT7_SPAN,
    OPCODE_SPAN,
    MatchPattern,
    instruction_width,
    parse_match_bits,
    slice_bits,
)

logger = logging.getLogger(__name__)

# Variant key preferred when an encoding is split by base architecture
PREFERRED_VARIANT = "RV32"

# Constant-run span -> label role
_CONSTANT_ROLES: dict[tuple[int, int], str] = {
    FUNCT7_SPAN: "funct7",
    FUNCT3_SPAN: "funct3",
    OPCODE_SPAN: "opcode",
}
_DEFAULT_ROLE = "const"


class FieldKind(Enum):
    """What occupies a span of instruction bits."""

    CONSTANT = "const"
    VARIABLE = "var"
    GAP = "gap"


@dataclass(frozen=True)
class VariableFieldSpec:
    """A raw ``{name, location}`` variable record."""

    name: str
    location: str | int | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VariableFieldSpec:
        return cls(str(data.get("name", "")), data.get("location"))


@dataclass(frozen=True)
class ResolvedField:
    """A constant run or variable field placed in the instruction word.

    ``range`` spans from the highest to the lowest bit the field touches.
    ``width`` counts only the bits in ``segments``, which may be disjoint.
    """

    label: str
    range: BitRange
    width: int
    kind: FieldKind
    segments: tuple[BitRange, ...]

    @property
    def high(self) -> int:
        return self.range.high

    @property
    def low(self) -> int:
        return self.range.low


@dataclass(frozen=True)
class EncodingVariant:
    """The encoding chosen to represent an instruction.

    ``key`` is None for a flat encoding, otherwise the sub-architecture key
    that was picked out of ``candidates``.
    """

    encoding: Mapping[str, Any]
    key: str | None = None
    candidates: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldResolution:
    """Resolved fields of one instruction plus data-quality notes."""

    fields: tuple[ResolvedField, ...]
    variant: EncodingVariant
    pattern: MatchPattern | None
    width: int
    dropped: tuple[str, ...] = field(default=())
    malformed: tuple[str, ...] = field(default=())
    out_of_range: tuple[str, ...] = field(default=())

    @property
    def match(self) -> str | None:
        return self.variant.encoding.get("match")

    @property
    def unsupported_width(self) -> bool:
        return bool(self.match) and self.pattern is None


def select_variant(encoding: Mapping[str, Any] | None) -> EncodingVariant:
    """Pick the encoding to resolve.

    A flat encoding (one with ``match`` or ``variables``) is used as is.
    Otherwise the record is keyed by sub-architecture: ``RV32`` is
    preferred, then the first key in insertion order.
    """
    if not encoding:
        return EncodingVariant({})
    if "match" in encoding or "variables" in encoding:
        return EncodingVariant(encoding)

    candidates = tuple(str(k) for k in encoding)
    key = PREFERRED_VARIANT if PREFERRED_VARIANT in encoding else candidates[0]
    chosen = encoding.get(key)
    if not isinstance(chosen, Mapping):
        chosen = {}
    logger.debug("Using variant %s out of %s", key, candidates)
    return EncodingVariant(chosen, key, candidates)


def _variable_specs(encoding: Mapping[str, Any]) -> list[VariableFieldSpec]:
    raw = encoding.get("variables")
    if not isinstance(raw, list):
        return []
    return [VariableFieldSpec.from_dict(v) for v in raw if isinstance(v, Mapping)]


def constant_label(high: int, low: int, bits: str) -> str:
    """Label a constant run by its span, e.g. ``"opcode=0110011"``."""
    role = _CONSTANT_ROLES.get((high, low), _DEFAULT_ROLE)
    return f"{role}={bits}"


def constant_runs(pattern: MatchPattern) -> list[ResolvedField]:
    """Extract maximal runs of fixed bits from a match pattern, MSB first."""
    width = len(pattern)
    runs: list[ResolvedField] = []
    bit = width - 1
    while bit >= 0:
        hi = bit
        while bit >= 0 and pattern[width - 1 - bit] != DONT_CARE:
            bit -= 1
        lo = bit + 1
        if hi < lo:
            # Zero-length run: we are sitting on a don't-care bit
            bit -= 1
            continue
        span = BitRange(hi, lo)
        runs.append(ResolvedField(
            label=constant_label(hi, lo, slice_bits(pattern, hi, lo)),
            range=span,
            width=span.width,
            kind=FieldKind.CONSTANT,
            segments=(span,),
        ))
    return runs


def clip_to_width(ranges: tuple[BitRange, ...], width: int) -> tuple[BitRange, ...]:
    """Cut ranges down to bits ``[width - 1, 0]``; ranges wholly above vanish."""
    top = width - 1
    return tuple(
        r if r.high <= top else BitRange(top, r.low)
        for r in ranges
        if r.low <= top
    )


def resolve_fields(encoding: Mapping[str, Any] | None) -> FieldResolution:
    """Build the full field inventory of one instruction encoding.

    Variables whose location yields no range inside the word are dropped;
    variables with some unreadable pieces keep the pieces that parsed, and
    pieces reaching past the top bit are clipped to it. All three are noted
    on the result. No completeness or overlap checking is done here.

    Args:
        encoding: The ``encoding`` mapping of a UDB instruction document.

    Returns:
        A FieldResolution whose fields are sorted descending by high bit.
    """
    variant = select_variant(encoding)
    enc = variant.encoding
    match = enc.get("match")
    pattern = parse_match_bits(match) if isinstance(match, str) else None
    width = instruction_width(match if isinstance(match, str) else None)

    fields: list[ResolvedField] = []
    dropped: list[str] = []
    malformed: list[str] = []
    out_of_range: list[str] = []

    for spec in _variable_specs(enc):
        parsed = parse_location(spec.location)
        if parsed.is_malformed:
            malformed.append(spec.name)
        segments = clip_to_width(parsed.ranges, width)
        if segments != parsed.ranges:
            out_of_range.append(spec.name)
        if not segments:
            dropped.append(spec.name)
            continue
        fields.append(ResolvedField(
            label=spec.name,
            range=BitRange(
                max(s.high for s in segments), min(s.low for s in segments)
            ),
            width=sum(s.width for s in segments),
            kind=FieldKind.VARIABLE,
            segments=segments,
        ))

    if pattern is not None:
        fields.extend(constant_runs(pattern))
    elif isinstance(match, str) and match:
        logger.debug("Unsupported match width %d: %r", len(match), match)

    if dropped:
        logger.debug("Dropped unplaceable variables: %s", ", ".join(dropped))
    if out_of_range:
        logger.debug(
            "Clipped variables to %d bits: %s", width, ", ".join(out_of_range)
        )

    # Stable sort keeps variables ahead of constants on equal high bits
    fields.sort(key=lambda f: f.high, reverse=True)

    return FieldResolution(
        fields=tuple(fields),
        variant=variant,
        pattern=pattern,
        width=width,
        dropped=tuple(dropped),
        malformed=tuple(malformed),
        out_of_range=tuple(out_of_range),
    )


def compute_fields(encoding: Mapping[str, Any] | None) -> tuple[ResolvedField, ...]:
    """Resolve an encoding and return only its sorted field list."""
    return resolve_fields(encoding).fields
