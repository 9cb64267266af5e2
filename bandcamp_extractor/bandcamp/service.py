"""
URL recognition and extractor selection for Bandcamp.

Only track pages are supported. Album, artist, search and playlist pages
are recognised as Bandcamp URLs but rejected up front.
"""

from urllib.parse import urlparse

from bandcamp_extractor.bandcamp.stream_extractor import BandcampStreamExtractor
from bandcamp_extractor.core.downloader import Downloader
from bandcamp_extractor.core.exceptions import ExtractionError
from bandcamp_extractor.stream.base import StreamExtractor

TRACK_PATH_MARKER = "/track/"


def is_track_url(url: str) -> bool:
    """
    Check whether a URL points at a single track page.

    Artists may use custom domains, so the host is not checked; any
    http(s) URL whose path contains /track/ is accepted.

    Examples:
        is_track_url("https://artist.bandcamp.com/track/song")  # True
        is_track_url("https://music.artist.com/track/song")     # True
        is_track_url("https://artist.bandcamp.com/album/lp")    # False
    """
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    return TRACK_PATH_MARKER in parsed.path and not parsed.path.endswith(TRACK_PATH_MARKER)


def get_stream_extractor(url: str, downloader: Downloader) -> StreamExtractor:
    """
    Create the extractor for a track URL.

    Args:
        url: Track page URL.
        downloader: Fetch collaborator for the extractor.

    Returns:
        A StreamExtractor in the CREATED state.

    Raises:
        ExtractionError: If the URL is not a supported track URL.
    """
    if not is_track_url(url):
        raise ExtractionError(
            f"Not a Bandcamp track URL: {url}",
            details={"url": url}
        )
    return BandcampStreamExtractor(url.strip(), downloader)
