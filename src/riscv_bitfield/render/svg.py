"""SVG register diagram renderer for bitfield payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from xml.sax.saxutils import escape

# Diagram geometry (pixels)
BIT_WIDTH = 20
MARGIN = 10
HEADER_HEIGHT = 16
LANE_HEIGHT = 30

COLORS = {
    "field_bg": "#ffffff",
    "gap_bg": "#f0f0f0",
    "border": "#333333",
    "text": "#333333",
    "bit_num": "#666666",
}


def _check_payload(reg: Sequence[Mapping[str, Any]], bits: int) -> None:
    total = 0
    for entry in reg:
        width = entry.get("bits")
        if not isinstance(width, int) or width <= 0:
            raise ValueError(f"Invalid field width {width!r} for {entry.get('name')!r}")
        total += width
    if total != bits:
        raise ValueError(f"Field widths sum to {total}, expected {bits}")


def render_svg(reg: Sequence[Mapping[str, Any]], bits: int = 32) -> str:
    """Render an MSB-first ``[{name, bits}, ...]`` list as a one-lane SVG diagram.

    Each field becomes a box labelled with its name; the bit numbers of
    each field's edges are printed above the lane.

    Raises:
        ValueError: If a width is not a positive int or widths do not sum
            to ``bits``.
    """
    _check_payload(reg, bits)

    width = 2 * MARGIN + bits * BIT_WIDTH
    height = 2 * MARGIN + HEADER_HEIGHT + LANE_HEIGHT
    lane_y = MARGIN + HEADER_HEIGHT

    svg_lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" class="bitfield">',
        "  <style>",
        f"    .bit-num {{ font: 9px monospace; fill: {COLORS['bit_num']}; text-anchor: middle; }}",
        f"    .field-label {{ font: 11px monospace; fill: {COLORS['text']}; "
        "text-anchor: middle; dominant-baseline: middle; }",
        "  </style>",
    ]

    msb = bits - 1
    x = MARGIN
    for entry in reg:
        field_bits = entry["bits"]
        field_width = field_bits * BIT_WIDTH
        name = str(entry.get("name") or "")
        hi = msb
        lo = msb - field_bits + 1

        fill = COLORS["field_bg"] if name else COLORS["gap_bg"]
        svg_lines.append(
            f'  <rect x="{x}" y="{lane_y}" width="{field_width}" height="{LANE_HEIGHT}" '
            f'fill="{fill}" stroke="{COLORS["border"]}" stroke-width="1"/>'
        )
        svg_lines.append(
            f'  <text x="{x + BIT_WIDTH / 2}" y="{lane_y - 4}" class="bit-num">{hi}</text>'
        )
        if lo != hi:
            svg_lines.append(
                f'  <text x="{x + field_width - BIT_WIDTH / 2}" y="{lane_y - 4}" '
                f'class="bit-num">{lo}</text>'
            )
        if name:
            svg_lines.append(
                f'  <text x="{x + field_width / 2}" y="{lane_y + LANE_HEIGHT / 2}" '
                f'class="field-label">{escape(name)}</text>'
            )

        x += field_width
        msb = lo - 1

    svg_lines.append("</svg>")
    return "\n".join(svg_lines)
