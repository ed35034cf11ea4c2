"""Extension grouping: human-readable extension names and per-extension listings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .udb import InstructionRecord, slugify_extension

# Extension name -> human-readable description
EXTENSION_DESCRIPTIONS: dict[str, str] = {
    "I": "Base Integer",
    "E": "Embedded Base",
    "M": "Integer Multiply/Divide",
    "A": "Atomic Instructions",
    "F": "Single-Precision Floating Point",
    "D": "Double-Precision Floating Point",
    "Q": "Quad-Precision Floating Point",
    "C": "Compressed Instructions",
    "B": "Bit Manipulation",
    "H": "Hypervisor",
    "S": "Supervisor",
    "V": "Vector",
    "Sdext": "Supervisor Debug",
    "Smdbltrp": "Supervisor Multiple Double Trap",
    "Smrnmi": "Supervisor Recursive NMI",
    "Svinval": "Supervisor Virtual Invalidation",
    "Zaamo": "Atomics extensions",
    "Zabha": "Byte/Halfword Atomics",
    "Zacas": "Compare-and-Swap Atomics",
    "Zalasr": "Atomic Logical Shift Right",
    "Zalrsc": "Load-Reserved/Store-Conditional",
    "Zawrs": "Wait-on-Reservation-Set",
    "Zba": "Address Generation Bit-Manip",
    "Zbb": "Basic Bit-Manip",
    "Zbc": "Carry-Less Multiply",
    "Zbkb": "Bit-Manip Crypto B",
    "Zbkx": "Bit-Manip Crypto X",
    "Zbs": "Single-Bit Manipulation",
    "Zcb": "Compressed Bit-Manip",
    "Zcd": "Compressed Double",
    "Zcf": "Compressed Floating Point",
    "Zcmop": "Compressed Micro-Operations",
    "Zcmp": "Compressed Pair",
    "Zfa": "Vector Atomic Floating",
    "Zfbfmin": "Vector BF16 Min",
    "Zfh": "Half-Precision Floating Point",
    "Zicbom": "Cache Block Management",
    "Zicboz": "Zero Cache Block",
    "Zicfilp": "Fetch Line Prefetch",
    "Zicfiss": "Instruction Streaming",
    "Zicond": "Conditional Ops",
    "Zicsr": "CSR Instructions",
    "Zifencei": "Instruction-Fetch Fence",
    "Zimop": "Integer Multiply and Division Ops",
    "Zkn": "Scalar Cryptography",
    "Zknd": "NIST Suite: AES Decryption",
    "Zkne": "NIST Suite: AES Encryption",
    "Zknh": "NIST Suite: Hash",
    "Zks": "Scalar Crypto Suite",
    "Zvbb": "Vector Bitwise",
    "Zvbc": "Vector Carry-less Multiply",
    "Zvfbfmin": "Vector BF16 Min",
    "Zvfbfwma": "Vector BF16 Fused Multiply-Add",
    "Zvkg": "Vector Galois Field",
    "Zvkned": "Vector AES Decryption",
    "Zvknha": "Vector Hash",
    "Zvks": "Vector Crypto Suite",
}


@dataclass(frozen=True)
class ExtensionGroup:
    """All loaded instructions belonging to one extension."""

    name: str
    slug: str
    description: str | None
    instructions: tuple[InstructionRecord, ...]

    @property
    def count(self) -> int:
        return len(self.instructions)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "count": self.count,
            "instructions": [i.name for i in self.instructions],
        }


def describe_extension(name: str) -> str | None:
    """Human-readable description of an extension, or None if unknown."""
    return EXTENSION_DESCRIPTIONS.get(name)


def group_by_extension(instructions: Iterable[InstructionRecord]) -> list[ExtensionGroup]:
    """Group instructions by extension, both levels sorted by name."""
    by_extension: dict[str, list[InstructionRecord]] = {}
    slugs: dict[str, str] = {}
    for inst in instructions:
        name = inst.extension or "unknown"
        by_extension.setdefault(name, []).append(inst)
        slugs.setdefault(name, inst.extension_slug or slugify_extension(name))

    return [
        ExtensionGroup(
            name=name,
            slug=slugs[name],
            description=describe_extension(name),
            instructions=tuple(sorted(insts, key=lambda i: i.name)),
        )
        for name, insts in sorted(by_extension.items())
    ]
