"""Match-pattern parser: explodes UDB match strings into per-bit symbols."""

from __future__ import annotations

from dataclasses import dataclass

# Instruction widths with a fixed-width match pattern
SUPPORTED_WIDTHS: tuple[int, ...] = (16, 32)

DONT_CARE = "-"

# Fixed spans of the standard 32-bit constant fields: (high, low)
OPCODE_SPAN = (6, 0)
FUNCT3_SPAN = (14, 12)
FUNCT7_SPAN = (31, 25)

# Symbols of a match pattern, index 0 = most significant bit
MatchPattern = tuple[str, ...]


@dataclass(frozen=True)
class OpcodeFields:
    """Literal opcode/funct3/funct7 bits of a 32-bit match pattern."""

    opcode: str | None = None
    funct3: str | None = None
    funct7: str | None = None


def parse_match_bits(match: str | None) -> MatchPattern | None:
    """Split a match string into one symbol per bit.

    Returns None unless the string is exactly 16 or 32 characters long.
    """
    if not match or len(match) not in SUPPORTED_WIDTHS:
        return None
    return tuple(match)


def instruction_width(match: str | None) -> int:
    """Total instruction width implied by a match string (16 or 32)."""
    return 16 if match is not None and len(match) == 16 else 32


def slice_bits(pattern: MatchPattern, high: int, low: int) -> str:
    """Return the symbols of bits ``[high, low]`` as a string, MSB first."""
    width = len(pattern)
    return "".join(pattern[width - 1 - high:width - low])


def is_literal(bits: str) -> bool:
    """True if ``bits`` is non-empty and made only of ``0``/``1``."""
    return bool(bits) and all(b in "01" for b in bits)


def extract_opcode_fields(match: str | None) -> OpcodeFields:
    """Slice opcode, funct3 and funct7 out of a 32-bit match string.

    opcode and funct3 are reported as found; funct7 is only reported when
    every one of its bits is fixed, since many formats reuse bits 31..25
    for operands.
    """
    pattern = parse_match_bits(match)
    if pattern is None or len(pattern) != 32:
        return OpcodeFields()

    funct7 = slice_bits(pattern, *FUNCT7_SPAN)
    return OpcodeFields(
        opcode=slice_bits(pattern, *OPCODE_SPAN),
        funct3=slice_bits(pattern, *FUNCT3_SPAN),
        funct7=funct7 if is_literal(funct7) else None,
    )
