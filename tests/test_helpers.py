"""Test Bandcamp helper functions"""

from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup

from bandcamp_extractor.bandcamp.helpers import (
    element_text,
    get_image_url,
    license_label,
    non_empty_and_null_join,
    parse_date,
)


class TestLicenseLabel:
    """Test the license code table"""

    @pytest.mark.parametrize("code,expected", [
        (1, "All rights reserved ©"),
        (2, "CC BY-NC-ND 3.0"),
        (3, "CC BY-NC-SA 3.0"),
        (4, "CC BY-NC 3.0"),
        (5, "CC BY-ND 3.0"),
        (6, "CC BY 3.0"),
        (8, "CC BY-SA 3.0"),
    ])
    def test_known_codes(self, code, expected):
        assert license_label(code) == expected

    @pytest.mark.parametrize("code", [0, 7, -1, 9, None, "2", 2.0, True])
    def test_everything_else_is_unknown(self, code):
        """7, out-of-range, absent and non-integer codes map to Unknown"""
        assert license_label(code) == "Unknown"


class TestNonEmptyAndNullJoin:
    """Test description composition"""

    def test_skips_empty_and_none(self):
        assert non_empty_and_null_join("\n\n", ["A", "", "C"]) == "A\n\nC"
        assert non_empty_and_null_join("\n\n", ["A", None, "C"]) == "A\n\nC"

    def test_no_leading_or_trailing_separator(self):
        assert non_empty_and_null_join("\n\n", [None, "B", ""]) == "B"

    def test_all_absent(self):
        assert non_empty_and_null_join("\n\n", [None, None, None]) == ""
        assert non_empty_and_null_join("\n\n", []) == ""

    def test_keeps_order(self):
        assert non_empty_and_null_join(", ", ["c", "a", "b"]) == "c, a, b"

    def test_skips_non_strings(self):
        assert non_empty_and_null_join("\n\n", [42, "B", 0.5, ["x"], "D"]) == "B\n\nD"


class TestElementText:
    """Test DOM text normalization"""

    def test_nested_elements_are_space_separated(self):
        element = BeautifulSoup("<a>hip <b>hop</b></a>", "html.parser").a
        assert element_text(element) == "hip hop"

    def test_collapses_whitespace(self):
        element = BeautifulSoup("<a>\n  lo-fi \t beats\n</a>", "html.parser").a
        assert element_text(element) == "lo-fi beats"


class TestParseDate:
    """Test publish date parsing"""

    def test_bandcamp_format(self):
        parsed = parse_date("16 Aug 2019 00:00:00 GMT")
        assert parsed == datetime(2019, 8, 16, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", [None, "", "   ", "not a date at all"])
    def test_absent_or_unparseable(self, text):
        assert parse_date(text) is None


class TestImageUrl:
    """Test image URL construction"""

    def test_album_art(self):
        assert get_image_url(1234567890, album=True) == "https://f4.bcbits.com/img/a1234567890_10.jpg"

    def test_non_album_image(self):
        assert get_image_url(42, album=False) == "https://f4.bcbits.com/img/42_10.jpg"
