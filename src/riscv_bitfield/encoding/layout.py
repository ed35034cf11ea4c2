"""Bitfield layout builder: tiles the instruction word with fields and gaps."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .fields import FieldKind, ResolvedField
from .location import BitRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSegment:
    """One contiguous span of the final layout. Gaps have an empty label."""

    label: str
    range: BitRange
    width: int
    kind: FieldKind

    @property
    def high(self) -> int:
        return self.range.high

    @property
    def low(self) -> int:
        return self.range.low

    @property
    def display_name(self) -> str:
        """Label as shown to a renderer: constants keep only their bits."""
        if self.kind is FieldKind.CONSTANT:
            _, sep, bits = self.label.partition("=")
            if sep and bits:
                return bits
        return self.label


def _segment(label: str, high: int, low: int, kind: FieldKind) -> LayoutSegment:
    span = BitRange(high, low)
    return LayoutSegment(label, span, span.width, kind)


def _gap(high: int, low: int) -> LayoutSegment:
    return _segment("", high, low, FieldKind.GAP)


def expand_fields(fields: Iterable[ResolvedField]) -> list[LayoutSegment]:
    """Split every field into one segment per contiguous range, sorted MSB first.

    Each piece of a multi-segment field keeps the field's label.
    """
    expanded: list[LayoutSegment] = []
    for f in fields:
        for seg in f.segments or (f.range,):
            expanded.append(LayoutSegment(f.label, seg, seg.width, f.kind))
    expanded.sort(key=lambda s: s.high, reverse=True)
    return expanded


def find_overlaps(
    fields: Iterable[ResolvedField],
) -> list[tuple[LayoutSegment, LayoutSegment]]:
    """Return pairs of expanded segments that claim the same bits."""
    expanded = expand_fields(fields)
    overlaps: list[tuple[LayoutSegment, LayoutSegment]] = []
    for i, upper in enumerate(expanded):
        for lower in expanded[i + 1:]:
            if lower.high < upper.low:
                break
            overlaps.append((upper, lower))
    return overlaps


def build_layout(
    fields: Iterable[ResolvedField], total_bits: int = 32,
) -> tuple[LayoutSegment, ...]:
    """Lay out resolved fields across ``total_bits`` bits, filling holes with gaps.

    For non-overlapping fields inside the word, the returned ranges
    partition ``[0, total_bits - 1]``, sorted descending. Overlapping input
    is tolerated: no gap is ever emitted with a non-positive width. Segments
    reaching past the top bit are clipped to it, or skipped if wholly above.

    Args:
        fields: Resolved fields, in any order.
        total_bits: Instruction width (16 or 32).

    Returns:
        Layout segments ordered from the most significant bit down.
    """
    fields = list(fields)
    expanded = expand_fields(fields)

    overlaps = find_overlaps(fields)
    if overlaps:
        logger.warning(
            "Overlapping fields: %s",
            ", ".join(f"{a.label}[{a.range}]/{b.label}[{b.range}]" for a, b in overlaps),
        )

    top = total_bits - 1
    outside = [s for s in expanded if s.high > top]
    if outside:
        logger.warning(
            "Fields past bit %d clipped: %s",
            top,
            ", ".join(f"{s.label}[{s.range}]" for s in outside),
        )

    laid_out: list[LayoutSegment] = []
    cursor = top
    for seg in expanded:
        if seg.low > top:
            continue
        if seg.high > top:
            seg = _segment(seg.label, top, seg.low, seg.kind)
        if cursor > seg.high:
            laid_out.append(_gap(cursor, seg.high + 1))
        laid_out.append(seg)
        cursor = min(cursor, seg.low - 1)

    if cursor >= 0:
        laid_out.append(_gap(cursor, 0))

    laid_out.sort(key=lambda s: s.high, reverse=True)
    return tuple(laid_out)


def layout_width(segments: Iterable[LayoutSegment]) -> int:
    """Sum of segment widths; equals the instruction width for a full tiling."""
    return sum(s.width for s in segments)


def to_bitfield_reg(segments: Iterable[LayoutSegment]) -> list[dict[str, str | int]]:
    """Convert a layout into the renderer payload ``[{name, bits}, ...]``, MSB first."""
    return [{"name": s.display_name, "bits": s.width} for s in segments]
