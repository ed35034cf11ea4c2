"""Instruction encoding core: location/match parsing, field resolution, layout."""

from .classify import FormatTag, detect_encoding_type, shadowed_tags
from .fields import (
    EncodingVariant,
    FieldKind,
    FieldResolution,
    ResolvedField,
    VariableFieldSpec,
    compute_fields,
    resolve_fields,
    select_variant,
)
from .layout import (
    LayoutSegment,
    build_layout,
    find_overlaps,
    layout_width,
    to_bitfield_reg,
)
from .location import BitRange, LocationParse, parse_location, parse_location_segments
from .match import (
    OpcodeFields,
    extract_opcode_fields,
    instruction_width,
    parse_match_bits,
)

__all__ = [
    "BitRange",
    "EncodingVariant",
    "FieldKind",
    "FieldResolution",
    "FormatTag",
    "LayoutSegment",
    "LocationParse",
    "OpcodeFields",
    "ResolvedField",
    "VariableFieldSpec",
    "build_layout",
    "compute_fields",
    "detect_encoding_type",
    "extract_opcode_fields",
    "find_overlaps",
    "instruction_width",
    "layout_width",
    "parse_location",
    "parse_location_segments",
    "parse_match_bits",
    "resolve_fields",
    "select_variant",
    "shadowed_tags",
    "to_bitfield_reg",
]
