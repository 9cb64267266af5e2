"""Test embedded JSON payload location"""

import pytest
from bs4 import BeautifulSoup

from bandcamp_extractor.bandcamp.embedded import get_album_info_json, get_json_data
from bandcamp_extractor.core.exceptions import ParsingCause, ParsingError

from conftest import build_page


class TestGetJsonData:
    """Test locating and parsing the data-tralbum attribute"""

    def test_parses_escaped_payload(self, sample_payload):
        """HTML-escaped JSON in the attribute is decoded to the original object"""
        data = get_album_info_json(build_page(sample_payload))

        assert data == sample_payload
        assert data["current"]["title"] == "Test Song"

    def test_accepts_parsed_document(self, sample_payload):
        """An already parsed BeautifulSoup document is used as is"""
        document = BeautifulSoup(build_page(sample_payload), "html.parser")
        assert get_album_info_json(document)["artist"] == "Test Artist"

    def test_unknown_fields_are_kept(self, sample_payload):
        sample_payload["brand_new_field"] = {"nested": [1, 2, 3]}
        data = get_album_info_json(build_page(sample_payload))
        assert data["brand_new_field"] == {"nested": [1, 2, 3]}

    def test_missing_attribute(self):
        """A page without the attribute raises with cause MISSING"""
        with pytest.raises(ParsingError) as exc_info:
            get_album_info_json("<html><body><p>Not a track</p></body></html>")

        assert exc_info.value.cause is ParsingCause.MISSING
        assert exc_info.value.is_missing
        assert exc_info.value.details["attribute"] == "data-tralbum"

    def test_malformed_json(self):
        """Invalid JSON in the attribute raises with cause MALFORMED"""
        page = '<html><head><script data-tralbum="{url: not json"></script></head></html>'
        with pytest.raises(ParsingError) as exc_info:
            get_album_info_json(page)

        assert exc_info.value.cause is ParsingCause.MALFORMED
        assert exc_info.value.is_malformed
        assert "original_error" in exc_info.value.details

    def test_empty_attribute_is_malformed(self):
        page = '<html><head><script data-tralbum=""></script></head></html>'
        with pytest.raises(ParsingError) as exc_info:
            get_album_info_json(page)
        assert exc_info.value.cause is ParsingCause.MALFORMED

    def test_non_object_json_is_malformed(self):
        page = '<html><head><script data-tralbum="[1, 2]"></script></head></html>'
        with pytest.raises(ParsingError) as exc_info:
            get_album_info_json(page)
        assert exc_info.value.cause is ParsingCause.MALFORMED

    def test_custom_attribute(self):
        page = '<div id="pagedata" data-blob="{&quot;a&quot;: 1}"></div>'
        assert get_json_data(page, "data-blob") == {"a": 1}
