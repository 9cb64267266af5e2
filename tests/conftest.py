"""Test configuration and fixtures"""

import copy
import html
import json

import pytest

from bandcamp_extractor.core.downloader import Downloader, Response
from bandcamp_extractor.core.exceptions import FetchError
from bandcamp_extractor.bandcamp.stream_extractor import BandcampStreamExtractor

TRACK_URL = "https://artist.bandcamp.com/track/test-song"
STREAM_URL = "https://t4.bcbits.com/stream/abc123/mp3-128/987654321?p=0&ts=1&t=x"

SAMPLE_PAYLOAD = {
    "url": "http://artist.bandcamp.com/track/test-song",
    "artist": "Test Artist",
    "art_id": 1234567890,
    "current": {
        "title": "Test Song",
        "about": "About this song",
        "lyrics": None,
        "credits": "Mixed by Someone",
        "publish_date": "16 Aug 2019 00:00:00 GMT",
        "license_type": 1,
        "release_date": None,
    },
    "trackinfo": [
        {
            "title": "Test Song",
            "file": {"mp3-128": STREAM_URL},
            "duration": 215.4,
        }
    ],
    "is_preorder": False,
    "packages": None,
}

SAMPLE_BODY = """
<div id="bio-container">
  <img class="band-photo" src="https://f4.bcbits.com/img/0012345678_21.jpg" alt="Test Artist">
</div>
<div class="tralbumData tralbum-tags tralbum-tags-nu">
  <a class="tag" href="https://bandcamp.com/tag/electronic" itemprop="keywords">electronic</a>
  <a class="tag" href="https://bandcamp.com/tag/ambient" itemprop="keywords">ambient</a>
  <a class="tag" href="https://bandcamp.com/tag/electronic" itemprop="keywords">electronic</a>
</div>
<ul class="recommended-albums">
  <li class="recommended-album">
    <a class="album-link" href="https://other.bandcamp.com/album/first">
      <img class="album-art" src="https://f4.bcbits.com/img/a111_9.jpg">
      <span class="release-title">First Release</span>
      <span class="by-artist">by Other Artist</span>
    </a>
  </li>
  <li class="recommended-album">
    <a class="album-link" href="/album/second">
      <span class="release-title">Second Release</span>
    </a>
  </li>
  <li class="recommended-album">
    <a class="album-link" href="https://third.bandcamp.com/album/broken">
      <img class="album-art" src="https://f4.bcbits.com/img/a333_9.jpg">
    </a>
  </li>
</ul>
"""


def build_page(payload: dict | None, body: str = "") -> str:
    """Render a minimal track page with the payload in a data-tralbum attribute."""
    head = ""
    if payload is not None:
        blob = html.escape(json.dumps(payload), quote=True)
        head = f'<script type="text/javascript" data-tralbum="{blob}"></script>'
    return f"<html><head>{head}</head><body>{body}</body></html>"


class FakeDownloader(Downloader):
    """In-memory downloader serving fixed pages"""

    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.requested: list[str] = []

    def get(self, url: str) -> Response:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(f"HTTP 404 for {url}", details={"url": url}, status_code=404)
        return Response(url=url, status_code=200, response_body=self.pages[url])


@pytest.fixture
def sample_payload():
    """Fresh copy of a valid single-track payload"""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def make_extractor():
    """Factory building a fetched-ready extractor for a payload and body"""
    def _make(payload, body=SAMPLE_BODY, url=TRACK_URL):
        downloader = FakeDownloader({url: build_page(payload, body)})
        return BandcampStreamExtractor(url, downloader)
    return _make


@pytest.fixture
def fetched_extractor(make_extractor, sample_payload):
    """Extractor for the sample page, already fetched"""
    extractor = make_extractor(sample_payload)
    extractor.fetch_page()
    return extractor
