"""
Unit Tests for Page Size Extraction
"""

import pytest
from lxml import etree

from livremele.ingest.config import IngestConfig
from livremele.ingest.dimensions import (
    extract_dimensions,
    parse_length,
    parse_view_box,
)


def _root(attrs: str) -> etree._Element:
    return etree.fromstring(f'<svg xmlns="http://www.w3.org/2000/svg" {attrs}/>')


class TestParseViewBox:
    """Tests for parse_view_box()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0 0 800 600", (0.0, 0.0, 800.0, 600.0)),
            ("0,0,800,600", (0.0, 0.0, 800.0, 600.0)),
            ("  -10, 5  210.5 297 ", (-10.0, 5.0, 210.5, 297.0)),
        ],
    )
    def test_parse_when_four_numbers_then_tuple(self, value, expected):
        assert parse_view_box(value) == expected

    @pytest.mark.parametrize("value", [None, "", "0 0 800", "0 0 800 600 1", "0 0 wide 600"])
    def test_parse_when_malformed_then_none(self, value):
        assert parse_view_box(value) is None


class TestParseLength:
    """Tests for parse_length()."""

    @pytest.mark.parametrize(
        "value,expected",
        [("100", 100.0), ("12.5px", 12.5), ("210mm", 210.0), ("50%", 50.0), (".5in", 0.5), ("1e2", 100.0)],
    )
    def test_parse_when_numeric_prefix_then_number(self, value, expected):
        assert parse_length(value) == expected

    @pytest.mark.parametrize("value", [None, "", "auto", "px100"])
    def test_parse_when_no_number_then_none(self, value):
        assert parse_length(value) is None


class TestExtractDimensions:
    """Tests for the viewBox -> attributes -> default order."""

    def test_extract_when_view_box_valid_then_view_box_wins(self):
        assert extract_dimensions(_root('viewBox="0 0 800 600" width="10" height="10"')) == (800.0, 600.0)

    def test_extract_when_view_box_zero_then_attributes_used(self):
        assert extract_dimensions(_root('viewBox="0 0 0 0" width="210mm" height="297mm"')) == (210.0, 297.0)

    def test_extract_when_only_width_then_height_defaults(self):
        assert extract_dimensions(_root('width="400"')) == (400.0, 842.0)

    def test_extract_when_nothing_usable_then_a4_defaults(self):
        assert extract_dimensions(_root('width="auto" height="-5"')) == (595.0, 842.0)

    def test_extract_when_custom_defaults_then_used(self):
        config = IngestConfig(default_width=100, default_height=200)
        assert extract_dimensions(_root(""), config) == (100, 200)
