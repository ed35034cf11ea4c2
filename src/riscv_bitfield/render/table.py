"""Terminal rendering of instruction layouts with Rich."""

from __future__ import annotations

from collections.abc import Iterable

from rich.markup import escape
from rich.table import Table

from ..encoding.fields import FieldKind
from ..encoding.layout import LayoutSegment
from ..loader.udb import InstructionRecord

# Rich style per segment kind
_KIND_STYLES: dict[FieldKind, str] = {
    FieldKind.CONSTANT: "bold cyan",
    FieldKind.VARIABLE: "bold yellow",
    FieldKind.GAP: "dim",
}


def format_layout_bar(segments: Iterable[LayoutSegment]) -> str:
    """One-line Rich-markup bar of a layout, e.g. ``|0000000|xs2|...|``.

    Gaps show as dots, one per bit.
    """
    parts: list[str] = []
    for seg in segments:
        text = escape(seg.display_name) if seg.kind is not FieldKind.GAP else "." * seg.width
        style = _KIND_STYLES[seg.kind]
        parts.append(f"[{style}]{text}[/{style}]")
    return "|" + "|".join(parts) + "|"


def layout_table(record: InstructionRecord) -> Table:
    """Build a Rich Table listing every layout segment of an instruction.

    The title carries the name, width and format tag; the caption lists
    opcode/funct3/funct7 when known.
    """
    tag = record.encoding_type.value if record.encoding_type else "?"
    table = Table(title=f"{record.name} ({record.width}-bit, {tag}-type)")
    table.add_column("Bits", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Kind")
    table.add_column("Field")

    for seg in record.layout:
        style = _KIND_STYLES[seg.kind]
        table.add_row(
            str(seg.range),
            str(seg.width),
            seg.kind.value,
            f"[{style}]{escape(seg.label)}[/{style}]",
        )

    constants = [
        f"{name}={value}"
        for name, value in (
            ("opcode", record.opcode),
            ("funct3", record.funct3),
            ("funct7", record.funct7),
        )
        if value is not None
    ]
    if constants:
        table.caption = "  ".join(constants)
    return table
