"""UDB instruction loader: reads instruction YAML files and runs the encoding core."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..encoding.classify import FormatTag, detect_encoding_type
from ..encoding.fields import FieldResolution, ResolvedField, resolve_fields
from ..encoding.layout import LayoutSegment, build_layout, to_bitfield_reg
from ..encoding.match import extract_opcode_fields
from ..render.svg import render_svg
from .cache import InstructionCache

logger = logging.getLogger(__name__)

# Instruction definitions inside a riscv-unified-db checkout
DEFAULT_INST_ROOT = Path("riscv-unified-db") / "spec" / "std" / "isa" / "inst"

_DEFAULT_BASE = 32

Renderer = Callable[[Sequence[Mapping[str, Any]], int], str]


@dataclass(frozen=True)
class InstructionRecord:
    """One instruction with its resolved encoding and rendered diagram."""

    name: str
    long_name: str
    description: str
    defined_by: str
    defined_by_raw: Any
    base: int
    syntax: str
    encoding_type: FormatTag | None
    match: str | None
    variables: list[dict[str, Any]]
    fields: tuple[ResolvedField, ...]
    layout: tuple[LayoutSegment, ...]
    opcode: str | None
    funct3: str | None
    funct7: str | None
    extension: str
    extension_slug: str
    width: int
    bitfield: list[dict[str, str | int]]
    svg: str
    resolution: FieldResolution | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view of the record."""
        return {
            "name": self.name,
            "longName": self.long_name,
            "description": self.description,
            "definedBy": self.defined_by,
            "base": self.base,
            "syntax": self.syntax,
            "encodingType": self.encoding_type.value if self.encoding_type else None,
            "encoding": {
                "match": self.match,
                "variables": self.variables,
                "fields": [
                    {
                        "label": f.label,
                        "from": f.high,
                        "to": f.low,
                        "width": f.width,
                        "kind": f.kind.value,
                    }
                    for f in self.fields
                ],
                "opcode": self.opcode,
                "funct3": self.funct3,
                "funct7": self.funct7,
            },
            "extension": self.extension,
            "extensionSlug": self.extension_slug,
            "width": self.width,
            "bitfield": {"reg": self.bitfield},
            "bitfieldSVG": self.svg,
        }


def read_yaml_file(path: Path) -> Any:
    """Load one YAML document."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def normalize_defined_by(value: Any, fallback: str) -> str:
    """Flatten a ``definedBy`` value into display text.

    Strings pass through; lists are comma-joined; ``anyOf``/``allOf``
    mappings are joined with "or"/"and"; a mapping with a string ``name``
    gives that name. Anything else yields ``fallback``.
    """
    if not value:
        return fallback
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, Mapping):
        if isinstance(value.get("anyOf"), list):
            return " or ".join(str(v) for v in value["anyOf"])
        if isinstance(value.get("allOf"), list):
            return " and ".join(str(v) for v in value["allOf"])
        if isinstance(value.get("name"), str):
            return value["name"]
    return fallback


def slugify_extension(name: str) -> str:
    """URL-safe slug for an extension name, e.g. ``"Zba"`` -> ``"zba"``."""
    slug = re.sub(r"[^a-z0-9]+", "-", str(name).strip().lower()).strip("-")
    return slug or "unknown"


def format_syntax(name: str, assembly: Any) -> str:
    """Mnemonic followed by its assembly operands."""
    if isinstance(assembly, str):
        args = assembly
    elif isinstance(assembly, list):
        args = ", ".join(str(a) for a in assembly)
    else:
        args = ""
    return f"{name} {args}".strip()


def build_instruction(
    doc: Mapping[str, Any], extension: str, renderer: Renderer = render_svg,
) -> InstructionRecord:
    """Resolve, lay out, classify and render one instruction document.

    A renderer failure is logged and leaves the record with an empty SVG.
    """
    name = str(doc.get("name", ""))
    encoding = doc.get("encoding")
    if not isinstance(encoding, Mapping):
        encoding = {}

    resolution = resolve_fields(encoding)
    if resolution.malformed:
        logger.warning(
            "%s: unreadable location pieces in %s", name, ", ".join(resolution.malformed)
        )
    if resolution.out_of_range:
        logger.warning(
            "%s: locations past bit %d in %s",
            name, resolution.width - 1, ", ".join(resolution.out_of_range),
        )
    if resolution.unsupported_width:
        logger.info("%s: match pattern of unsupported width", name)

    width = resolution.width
    layout = build_layout(resolution.fields, width)
    bitfield = to_bitfield_reg(layout)

    svg = ""
    try:
        svg = renderer(bitfield, width)
    except Exception as e:
        logger.warning("Failed to render SVG for %s: %s", name, e)

    match = encoding.get("match")
    opcodes = extract_opcode_fields(match if isinstance(match, str) else None)
    variables = encoding.get("variables")

    return InstructionRecord(
        name=name,
        long_name=str(doc.get("long_name") or name),
        description=str(doc.get("description") or ""),
        defined_by=normalize_defined_by(doc.get("definedBy"), extension),
        defined_by_raw=doc.get("definedBy"),
        base=doc.get("base") or _DEFAULT_BASE,
        syntax=format_syntax(name, doc.get("assembly")),
        encoding_type=detect_encoding_type(encoding),
        match=match if isinstance(match, str) and match else None,
        variables=variables if isinstance(variables, list) else [],
        fields=resolution.fields,
        layout=layout,
        opcode=opcodes.opcode,
        funct3=opcodes.funct3,
        funct7=opcodes.funct7,
        extension=extension,
        extension_slug=slugify_extension(extension),
        width=width,
        bitfield=bitfield,
        svg=svg,
        resolution=resolution,
    )


def iter_instruction_files(root: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(extension, path)`` for each ``<root>/<extension>/*.yaml`` file."""
    for ext_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        for path in sorted(ext_dir.glob("*.yaml")):
            yield ext_dir.name, path


def load_instruction_file(
    path: Path, extension: str, renderer: Renderer = render_svg,
) -> InstructionRecord | None:
    """Load one instruction file; None (with a warning) if it is unusable."""
    try:
        doc = read_yaml_file(path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Skipping %s: %s", path, e)
        return None
    if not isinstance(doc, Mapping):
        logger.warning("Skipping %s: not a mapping", path)
        return None
    return build_instruction(doc, extension, renderer)


def _load_all(root: Path, renderer: Renderer) -> list[InstructionRecord]:
    instructions: list[InstructionRecord] = []
    for extension, path in iter_instruction_files(root):
        record = load_instruction_file(path, extension, renderer)
        if record is not None:
            instructions.append(record)
    instructions.sort(key=lambda r: (r.extension, r.name))
    logger.debug("Loaded %d instructions from %s", len(instructions), root)
    return instructions


def load_instructions(
    root: Path = DEFAULT_INST_ROOT,
    cache: InstructionCache[list[InstructionRecord]] | None = None,
    renderer: Renderer = render_svg,
) -> list[InstructionRecord]:
    """Load every instruction under ``root``, sorted by extension then name.

    A missing root directory yields an empty list and a warning. With a
    cache, each root is read at most once.

    Args:
        root: Directory holding one subdirectory of YAML files per extension.
        cache: Optional caller-owned cache shared between calls.
        renderer: Function turning a bitfield payload into SVG text.

    Returns:
        The loaded instruction records.
    """
    if not root.is_dir():
        logger.warning("UDB instruction directory not found: %s", root)
        return []
    if cache is None:
        return _load_all(root, renderer)
    return cache.get_or_load(str(root.resolve()), lambda: _load_all(root, renderer))
