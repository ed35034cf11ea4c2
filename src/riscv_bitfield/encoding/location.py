"""Bit-location parser: turns UDB location strings into bit ranges."""

from __future__ import annotations

from dataclasses import dataclass

# Separator between the disjoint pieces of a multi-segment field
SEGMENT_SEPARATOR = "|"


@dataclass(frozen=True)
class BitRange:
    """Inclusive span of instruction bits, bit 0 being the least significant."""

    high: int
    low: int

    def __post_init__(self) -> None:
        if self.low < 0:
            raise ValueError(f"Negative low bit: {self.low}")
        if self.high < self.low:
            raise ValueError(
                f"Inverted bit range: high={self.high} < low={self.low}"
            )

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    def __str__(self) -> str:
        if self.high == self.low:
            return str(self.high)
        return f"{self.high}-{self.low}"


@dataclass(frozen=True)
class LocationParse:
    """Result of parsing a location expression.

    ``ranges`` holds every piece that parsed, normalized and sorted.
    ``rejected`` holds the raw text of every piece that did not, so a caller
    can tell "no field here" apart from "field present but unreadable".
    """

    ranges: tuple[BitRange, ...]
    rejected: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.ranges

    @property
    def is_malformed(self) -> bool:
        return bool(self.rejected)


def _parse_bit(text: str) -> int | None:
    text = text.strip()
    # Bit indices are plain decimal digits
    if not text.isdecimal():
        return None
    return int(text)


def _parse_piece(piece: str) -> BitRange | None:
    """Parse one ``"hi-lo"`` or ``"n"`` piece; None if it is not two bit indices.

    Pieces with a second dash (``"3-2-1"``) or a sign (``"+5"``) are rejected
    whole rather than read up to the first bad character.
    """
    hi_text, sep, lo_text = piece.partition("-")
    hi = _parse_bit(hi_text)
    lo = _parse_bit(lo_text) if sep and lo_text.strip() else hi
    if hi is None or lo is None:
        return None
    return BitRange(max(hi, lo), min(hi, lo))


def parse_location(location: str | int | None) -> LocationParse:
    """Parse a (possibly multi-segment) location expression.

    Accepts ``None``, a bare bit index (int or string), ``"hi-lo"``, or
    several of those joined by ``|``. Endpoints may come in either order.
    Unparsable pieces are dropped and reported in ``rejected``.

    Args:
        location: The raw ``location`` value from a variable record.

    Returns:
        A LocationParse with ranges sorted descending by high, then low.
    """
    if location is None:
        return LocationParse(())

    ranges: list[BitRange] = []
    rejected: list[str] = []
    for raw_piece in str(location).split(SEGMENT_SEPARATOR):
        piece = raw_piece.strip()
        if not piece:
            continue
        parsed = _parse_piece(piece)
        if parsed is None:
            rejected.append(piece)
        else:
            ranges.append(parsed)

    ranges.sort(key=lambda r: (r.high, r.low), reverse=True)
    return LocationParse(tuple(ranges), tuple(rejected))


def parse_location_segments(location: str | int | None) -> tuple[BitRange, ...]:
    """Parse a location expression, silently dropping malformed pieces."""
    return parse_location(location).ranges
