"""UDB instruction loader module."""

from .cache import InstructionCache
from .extensions import ExtensionGroup, describe_extension, group_by_extension
from .udb import (
    DEFAULT_INST_ROOT,
    InstructionRecord,
    build_instruction,
    load_instruction_file,
    load_instructions,
)

__all__ = [
    "DEFAULT_INST_ROOT",
    "ExtensionGroup",
    "InstructionCache",
    "InstructionRecord",
    "build_instruction",
    "describe_extension",
    "group_by_extension",
    "load_instruction_file",
    "load_instructions",
]
