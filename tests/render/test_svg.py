"""Tests for the SVG register diagram renderer."""

import xml.etree.ElementTree as ET

import pytest

from riscv_bitfield.render.svg import BIT_WIDTH, MARGIN, render_svg

_NS = "{http://www.w3.org/2000/svg}"

R_TYPE_REG = [
    {"name": "0000000", "bits": 7},
    {"name": "xs2", "bits": 5},
    {"name": "xs1", "bits": 5},
    {"name": "000", "bits": 3},
    {"name": "xd", "bits": 5},
    {"name": "0110011", "bits": 7},
]


class TestRenderSvg:
    def test_well_formed(self) -> None:
        root = ET.fromstring(render_svg(R_TYPE_REG))
        assert root.tag == f"{_NS}svg"

    def test_one_box_per_field(self) -> None:
        root = ET.fromstring(render_svg(R_TYPE_REG))
        assert len(root.findall(f"{_NS}rect")) == len(R_TYPE_REG)

    def test_labels_and_bit_numbers(self) -> None:
        root = ET.fromstring(render_svg(R_TYPE_REG))
        texts = [t.text for t in root.findall(f"{_NS}text")]
        for name in ("xs2", "xs1", "xd", "0110011"):
            assert name in texts
        for bit in ("31", "25", "24", "20", "6", "0"):
            assert bit in texts

    def test_width_scales_with_bits(self) -> None:
        root = ET.fromstring(render_svg([{"name": "x", "bits": 16}], bits=16))
        assert root.get("width") == str(2 * MARGIN + 16 * BIT_WIDTH)

    def test_gap_has_no_label(self) -> None:
        root = ET.fromstring(render_svg([{"name": "", "bits": 32}]))
        assert [t.get("class") for t in root.findall(f"{_NS}text")] == ["bit-num", "bit-num"]

    def test_label_escaped(self) -> None:
        svg = render_svg([{"name": "a<b&c", "bits": 32}])
        assert "a&lt;b&amp;c" in svg
        ET.fromstring(svg)

    def test_widths_must_sum(self) -> None:
        with pytest.raises(ValueError, match="sum to 31"):
            render_svg([{"name": "x", "bits": 31}])

    def test_non_positive_width(self) -> None:
        with pytest.raises(ValueError, match="Invalid field width"):
            render_svg([{"name": "x", "bits": 0}, {"name": "y", "bits": 32}])
