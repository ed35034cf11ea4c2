"""Shared instruction encodings for encoding-core tests.

Each fixture returns the ``encoding`` mapping of a UDB instruction document.
"""

import pytest

# funct7 | xs2 | xs1 | funct3 | xd | opcode
ADD_MATCH = "0000000----------000-----0110011"
# imm[11:0] | xs1 | funct3 | xd | opcode
ADDI_MATCH = "-----------------000-----0010011"
# imm[11:5] | xs2 | xs1 | funct3 | imm[4:0] | opcode
SW_MATCH = "-----------------010-----0100011"
BEQ_MATCH = "-----------------000-----1100011"
LUI_MATCH = "-------------------------0110111"
# funct3 | imm[5] | xd | imm[4:0] | op
C_ADDI_MATCH = "000-----------01"


@pytest.fixture
def add_encoding() -> dict:
    return {
        "match": ADD_MATCH,
        "variables": [
            {"name": "xs2", "location": "24-20"},
            {"name": "xs1", "location": "19-15"},
            {"name": "xd", "location": "11-7"},
        ],
    }


@pytest.fixture
def addi_encoding() -> dict:
    return {
        "match": ADDI_MATCH,
        "variables": [
            {"name": "imm", "location": "31-20"},
            {"name": "xs1", "location": "19-15"},
            {"name": "xd", "location": "11-7"},
        ],
    }


@pytest.fixture
def sw_encoding() -> dict:
    return {
        "match": SW_MATCH,
        "variables": [
            {"name": "imm", "location": "31-25|11-7"},
            {"name": "xs2", "location": "24-20"},
            {"name": "xs1", "location": "19-15"},
        ],
    }


@pytest.fixture
def beq_encoding() -> dict:
    return {
        "match": BEQ_MATCH,
        "variables": [
            {"name": "imm", "location": "31|7|30-25|11-8"},
            {"name": "xs2", "location": "24-20"},
            {"name": "xs1", "location": "19-15"},
        ],
    }


@pytest.fixture
def lui_encoding() -> dict:
    return {
        "match": LUI_MATCH,
        "variables": [
            {"name": "imm", "location": "31-12"},
            {"name": "xd", "location": "11-7"},
        ],
    }


@pytest.fixture
def c_addi_encoding() -> dict:
    return {
        "match": C_ADDI_MATCH,
        "variables": [
            {"name": "imm", "location": "12|6-2"},
            {"name": "xd", "location": "11-7"},
        ],
    }


@pytest.fixture
def slli_variants() -> dict:
    """Shift-immediate split by base: RV32 has a 5-bit shamt, RV64 a 6-bit one."""
    return {
        "RV64": {
            "match": "000000-----------001-----0010011",
            "variables": [
                {"name": "shamt", "location": "25-20"},
                {"name": "xs1", "location": "19-15"},
                {"name": "xd", "location": "11-7"},
            ],
        },
        "RV32": {
            "match": "0000000----------001-----0010011",
            "variables": [
                {"name": "shamt", "location": "24-20"},
                {"name": "xs1", "location": "19-15"},
                {"name": "xd", "location": "11-7"},
            ],
        },
    }
