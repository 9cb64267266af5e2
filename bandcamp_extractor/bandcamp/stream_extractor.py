"""
Bandcamp track page extractor.

Fetches a track page once, then derives every metadata field from two
fixed sources:

    - the embedded `data-tralbum` JSON payload (title, artist, dates,
      license, description parts, art id, audio files)
    - the parsed DOM (artist photo, tags, recommended releases)

Field Rules:
    name                  current.title (required)
    url                   url, forced to https (required)
    uploader_url          scheme + host of url
    uploader_name         artist (required)
    textual_upload_date   current.publish_date, may be None
    upload_date           parsed publish_date, None when unparseable
    thumbnail_url         large image for art_id, "" when null
    uploader_avatar_url   first .band-photo src, "" when absent
    description           about, lyrics, credits joined by blank lines
    category              first .tag of the first .tralbum-tags (required)
    licence               current.license_type via the license table
    tags                  every [itemprop=keywords] text, in order

Track-count Gate:
    A page whose trackinfo lists more than one track is an album page.
    fetch_page() rejects it with ExtractionError.
"""

from datetime import datetime
from typing import Any

from bs4 import BeautifulSoup

from bandcamp_extractor.bandcamp.embedded import get_album_info_json
from bandcamp_extractor.bandcamp.helpers import (
    element_text,
    get_image_url,
    license_label,
    non_empty_and_null_join,
    parse_date,
)
from bandcamp_extractor.bandcamp.related import collect_related_items
from bandcamp_extractor.core.downloader import Downloader
from bandcamp_extractor.core.exceptions import ExtractionError, ParsingCause, ParsingError
from bandcamp_extractor.core.logger import get_logger
from bandcamp_extractor.stream.base import StreamExtractor
from bandcamp_extractor.stream.models import (
    AudioStream,
    MediaFormat,
    RelatedItem,
    StreamType,
)

logger = get_logger(__name__)

# The only codec the free stream ever offers
AUDIO_CODEC_KEY = "mp3-128"
AUDIO_BITRATE = 128

DESCRIPTION_SEPARATOR = "\n\n"


class BandcampStreamExtractor(StreamExtractor):
    """
    StreamExtractor for single Bandcamp tracks.

    Example:
        extractor = BandcampStreamExtractor(
            "https://artist.bandcamp.com/track/song", RequestsDownloader()
        )
        extractor.fetch_page()
        print(extractor.get_name(), extractor.get_audio_streams()[0].url)
    """

    def __init__(self, url: str, downloader: Downloader) -> None:
        super().__init__(url, downloader)
        self._album_json: dict[str, Any] = {}
        self._current: dict[str, Any] = {}
        self._document: BeautifulSoup | None = None

    def on_fetch_page(self, downloader: Downloader) -> None:
        html = downloader.get(self.url).response_body
        document = BeautifulSoup(html, "html.parser")
        album_json = get_album_info_json(document)

        trackinfo = album_json.get("trackinfo")
        if isinstance(trackinfo, list) and len(trackinfo) > 1:
            raise ExtractionError(
                "Page is actually an album, not a track",
                details={"url": self.url, "track_count": len(trackinfo)}
            )

        current = album_json.get("current")
        self._album_json = album_json
        self._current = current if isinstance(current, dict) else {}
        self._document = document

    def _require(self, source: dict[str, Any], key: str, path: str) -> str:
        value = source.get(key)
        if value is None:
            raise ParsingError(
                f"Could not get {path}",
                cause=ParsingCause.MISSING,
                details={"url": self.url, "field": path}
            )
        if not isinstance(value, str):
            raise ParsingError(
                f"Expected a string for {path}, got {type(value).__name__}",
                cause=ParsingCause.MALFORMED,
                details={"url": self.url, "field": path}
            )
        return value

    def get_name(self) -> str:
        self.assert_page_fetched()
        return self._require(self._current, "title", "current.title")

    def get_url(self) -> str:
        self.assert_page_fetched()
        url = self._require(self._album_json, "url", "url")
        if url.startswith("http://"):
            return "https://" + url[len("http://"):]
        return url

    def get_uploader_url(self) -> str:
        parts = self.get_url().split("/")
        # https: / (empty) / host / ...; keep only the host
        if len(parts) < 3 or not parts[2]:
            raise ParsingError(
                f"Could not get uploader url from {self.get_url()}",
                cause=ParsingCause.MALFORMED,
                details={"url": self.url, "field": "url"}
            )
        return f"https://{parts[2]}/"

    def get_uploader_name(self) -> str:
        self.assert_page_fetched()
        return self._require(self._album_json, "artist", "artist")

    def get_textual_upload_date(self) -> str | None:
        self.assert_page_fetched()
        return self._current.get("publish_date")

    def get_upload_date(self) -> datetime | None:
        return parse_date(self.get_textual_upload_date())

    def get_thumbnail_url(self) -> str:
        self.assert_page_fetched()
        art_id = self._album_json.get("art_id")
        if art_id is None:
            return ""
        return get_image_url(art_id, album=True)

    def get_uploader_avatar_url(self) -> str:
        self.assert_page_fetched()
        photo = self._document.find(class_="band-photo")
        if photo is None:
            return ""
        src = photo.get("src")
        return src if isinstance(src, str) else ""

    def get_description(self) -> str:
        self.assert_page_fetched()
        return non_empty_and_null_join(
            DESCRIPTION_SEPARATOR,
            [
                self._current.get("about"),
                self._current.get("lyrics"),
                self._current.get("credits"),
            ]
        )

    def get_category(self) -> str:
        """First tag on the page, which is the artist's genre."""
        self.assert_page_fetched()
        tag_list = self._document.find(class_="tralbum-tags")
        first_tag = tag_list.find(class_="tag") if tag_list is not None else None
        if first_tag is None:
            raise ParsingError(
                "Could not get category: page has no tags",
                cause=ParsingCause.MISSING,
                details={"url": self.url, "field": "tralbum-tags"}
            )
        return element_text(first_tag)

    def get_licence(self) -> str:
        self.assert_page_fetched()
        return license_label(self._current.get("license_type"))

    def get_tags(self) -> list[str]:
        self.assert_page_fetched()
        return [
            element_text(element)
            for element in self._document.find_all(attrs={"itemprop": "keywords"})
        ]

    def get_audio_streams(self) -> list[AudioStream]:
        self.assert_page_fetched()
        trackinfo = self._album_json.get("trackinfo")
        if not isinstance(trackinfo, list) or not trackinfo:
            raise ParsingError(
                "Could not get trackinfo",
                cause=ParsingCause.MISSING,
                details={"url": self.url, "field": "trackinfo"}
            )

        files = trackinfo[0].get("file") if isinstance(trackinfo[0], dict) else None
        stream_url = files.get(AUDIO_CODEC_KEY) if isinstance(files, dict) else None
        if not stream_url:
            raise ParsingError(
                f"Track has no {AUDIO_CODEC_KEY} file",
                cause=ParsingCause.MISSING,
                details={"url": self.url, "field": f"trackinfo[0].file.{AUDIO_CODEC_KEY}"}
            )

        return [AudioStream(url=stream_url, media_format=MediaFormat.MP3, average_bitrate=AUDIO_BITRATE)]

    def get_video_streams(self) -> list:
        return []

    def get_video_only_streams(self) -> list:
        return []

    def get_stream_type(self) -> StreamType:
        return StreamType.AUDIO_STREAM

    def get_related_items(self) -> list[RelatedItem]:
        self.assert_page_fetched()
        return collect_related_items(self._document, self.url).items
