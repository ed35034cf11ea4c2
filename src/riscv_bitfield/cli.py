"""Command-line interface for the RISC-V bitfield layout generator."""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .loader.extensions import group_by_extension
from .loader.udb import (
    DEFAULT_INST_ROOT,
    InstructionRecord,
    load_instruction_file,
    load_instructions,
)
from .render.table import format_layout_bar, layout_table


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records through Rich on stderr."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _add_root_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root", type=Path, default=DEFAULT_INST_ROOT,
        help=f"UDB instruction directory (default: {DEFAULT_INST_ROOT})",
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the bitfield CLI."""
    parser = argparse.ArgumentParser(description="RISC-V instruction bitfield layouts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    sub = parser.add_subparsers(dest="command")

    show_parser = sub.add_parser("show", help="Show the layout of one instruction file")
    show_parser.add_argument("file", type=Path, help="Path to an instruction YAML file")
    show_parser.add_argument(
        "--extension", default=None,
        help="Extension name (default: the file's parent directory name)",
    )

    list_parser = sub.add_parser("list", help="List every instruction with its layout")
    _add_root_arg(list_parser)
    list_parser.add_argument("--extension", default=None, help="Only this extension")

    export_parser = sub.add_parser("export", help="Export all layouts as JSON")
    _add_root_arg(export_parser)
    export_parser.add_argument(
        "--output", type=Path, default=None,
        help="JSON output file (default: stdout)",
    )
    export_parser.add_argument(
        "--svg-dir", type=Path, default=None,
        help="Also write one SVG diagram per instruction into this directory",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    console = Console()

    if args.command == "show":
        show_file(console, args.file, args.extension)
    elif args.command == "list":
        list_instructions(console, args.root, args.extension)
    elif args.command == "export":
        export_instructions(args.root, args.output, args.svg_dir)
    else:
        parser.print_help()
        sys.exit(1)


def show_file(console: Console, path: Path, extension: str | None = None) -> None:
    """Print the layout table of a single instruction file.

    Args:
        console: Rich console to print to.
        path: Instruction YAML file.
        extension: Extension name; defaults to the parent directory name.
    """
    if not path.is_file():
        print(f"Error: no such file '{path}'", file=sys.stderr)
        sys.exit(1)
    record = load_instruction_file(path, extension or path.parent.name)
    if record is None:
        print(f"Error: cannot load instruction from '{path}'", file=sys.stderr)
        sys.exit(1)

    console.print(layout_table(record))
    console.print(format_layout_bar(record.layout))
    if record.resolution is not None and record.resolution.dropped:
        console.print(
            f"[red]Unplaced variables:[/red] {', '.join(record.resolution.dropped)}"
        )


def list_instructions(
    console: Console, root: Path, extension: str | None = None,
) -> None:
    """Print one line per instruction: extension, name, format tag, layout bar."""
    records = load_instructions(root)
    if extension is not None:
        records = [r for r in records if r.extension == extension]
        if not records:
            print(f"Error: no instructions for extension '{extension}'", file=sys.stderr)
            sys.exit(1)

    for record in records:
        tag = record.encoding_type.value if record.encoding_type else "-"
        console.print(
            f"{record.extension:<10} {record.name:<16} {tag} "
            f"{format_layout_bar(record.layout)}",
            highlight=False,
        )


def _write_svgs(records: list[InstructionRecord], svg_dir: Path) -> int:
    svg_dir.mkdir(parents=True, exist_ok=True)
    written = 0
    for record in records:
        if not record.svg:
            continue
        (svg_dir / f"{record.name}.svg").write_text(record.svg, encoding="utf-8")
        written += 1
    return written


def export_instructions(
    root: Path, output: Path | None = None, svg_dir: Path | None = None,
) -> None:
    """Export every instruction and extension group as one JSON document.

    Args:
        root: UDB instruction directory.
        output: JSON file to write; stdout if None.
        svg_dir: Optional directory for per-instruction SVG files.
    """
    records = load_instructions(root)
    document = {
        "instructions": [r.to_dict() for r in records],
        "extensions": [g.to_dict() for g in group_by_extension(records)],
    }
    text = json.dumps(document, indent=2)

    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(records)} instructions to {output}", file=sys.stderr)

    if svg_dir is not None:
        written = _write_svgs(records, svg_dir)
        print(f"Wrote {written} SVG files to {svg_dir}", file=sys.stderr)
