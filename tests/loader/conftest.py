"""Fixtures that lay out a small UDB instruction tree on disk."""

import pytest

ADD_YAML = """\
$schema: inst_schema.json#
kind: instruction
name: add
long_name: Integer add
description: Add the value in xs1 to xs2, and store the result in xd.
definedBy: I
assembly: xd, xs1, xs2
encoding:
  match: 0000000----------000-----0110011
  variables:
    - name: xs2
      location: 24-20
    - name: xs1
      location: 19-15
    - name: xd
      location: 11-7
"""

SLLI_YAML = """\
name: slli
long_name: Shift left logical immediate
definedBy:
  anyOf: [I, Zbb]
assembly: xd, xs1, shamt
encoding:
  RV32:
    match: 0000000----------001-----0010011
    variables:
      - name: shamt
        location: 24-20
      - name: xs1
        location: 19-15
      - name: xd
        location: 11-7
  RV64:
    match: 000000-----------001-----0010011
    variables:
      - name: shamt
        location: 25-20
      - name: xs1
        location: 19-15
      - name: xd
        location: 11-7
"""

C_ADDI_YAML = """\
name: c.addi
long_name: Add a sign-extended non-zero immediate
definedBy: C
assembly: xd, imm
encoding:
  match: 000-----------01
  variables:
    - name: imm
      location: 12|6-2
    - name: xd
      location: 11-7
"""

SW_YAML = """\
name: sw
definedBy: I
encoding:
  match: "-----------------010-----0100011"
  variables:
    - name: imm
      location: 31-25|11-7
    - name: xs2
      location: 24-20
    - name: xs1
      location: 19-15
"""

BROKEN_YAML = "name: [unterminated\n"


@pytest.fixture
def inst_root(tmp_path):
    """A UDB-style ``inst`` directory with I and C extensions and one broken file."""
    root = tmp_path / "inst"
    i_dir = root / "I"
    c_dir = root / "C"
    i_dir.mkdir(parents=True)
    c_dir.mkdir()
    (i_dir / "sw.yaml").write_text(SW_YAML)
    (i_dir / "add.yaml").write_text(ADD_YAML)
    (i_dir / "slli.yaml").write_text(SLLI_YAML)
    (i_dir / "broken.yaml").write_text(BROKEN_YAML)
    (i_dir / "README.md").write_text("not an instruction\n")
    (c_dir / "c.addi.yaml").write_text(C_ADDI_YAML)
    return root
