"""Test utilities and helpers"""

import pytest

from bandcamp_extractor.bandcamp.service import get_stream_extractor, is_track_url
from bandcamp_extractor.bandcamp.stream_extractor import BandcampStreamExtractor
from bandcamp_extractor.core.exceptions import ExtractionError
from bandcamp_extractor.utils import run_in_parallel

from conftest import FakeDownloader


class TestRunInParallel:
    """Test parallel processing helper"""

    def test_results_keep_input_order(self):
        results = run_in_parallel(lambda x: x * 2, [3, 1, 2], num_threads=3, show_progress=False)
        assert results == [(3, 6), (1, 2), (2, 4)]

    def test_exceptions_are_collected(self):
        def fail_on_two(x):
            if x == 2:
                raise ValueError("two")
            return x

        results = run_in_parallel(fail_on_two, [1, 2, 3], num_threads=2, show_progress=False)

        assert results[0] == (1, 1)
        assert isinstance(results[1][1], ValueError)
        assert results[2] == (3, 3)

    def test_empty_input(self):
        assert run_in_parallel(lambda x: x, [], show_progress=False) == []


class TestService:
    """Test track URL recognition"""

    @pytest.mark.parametrize("url", [
        "https://artist.bandcamp.com/track/song",
        "http://artist.bandcamp.com/track/song?from=search",
        "https://music.custom-domain.com/track/song",
        "  https://artist.bandcamp.com/track/song  ",
    ])
    def test_track_urls(self, url):
        assert is_track_url(url)

    @pytest.mark.parametrize("url", [
        "https://artist.bandcamp.com/album/lp",
        "https://artist.bandcamp.com/",
        "https://artist.bandcamp.com/track/",
        "ftp://artist.bandcamp.com/track/song",
        "artist.bandcamp.com/track/song",
        "",
    ])
    def test_other_urls(self, url):
        assert not is_track_url(url)

    def test_get_stream_extractor(self):
        extractor = get_stream_extractor(" https://a.bandcamp.com/track/s ", FakeDownloader({}))

        assert isinstance(extractor, BandcampStreamExtractor)
        assert extractor.url == "https://a.bandcamp.com/track/s"

    def test_get_stream_extractor_rejects_albums(self):
        with pytest.raises(ExtractionError):
            get_stream_extractor("https://a.bandcamp.com/album/lp", FakeDownloader({}))
