"""RISC-V instruction bitfield layouts from Unified Database encodings."""

__version__ = "0.1.0"
