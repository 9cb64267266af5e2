"""
Bandcamp module for bandcamp-extractor.

This module turns a Bandcamp track page into a TrackMetadata record:
    - embedded: Locates and parses the data-tralbum JSON payload
    - stream_extractor: Field derivation and the single-track gate
    - related: Recommended releases, tolerant of malformed fragments
    - helpers: Date parsing, image URLs, license table
    - service: Track URL recognition and extractor selection

Usage:
    from bandcamp_extractor.bandcamp import get_stream_extractor
    from bandcamp_extractor.stream import extract_metadata

    extractor = get_stream_extractor(url, downloader)
    metadata = extract_metadata(extractor)
"""

from bandcamp_extractor.bandcamp.embedded import get_album_info_json, get_json_data
from bandcamp_extractor.bandcamp.related import (
    BandcampRelatedItemExtractor,
    RelatedItemsCollector,
    collect_related_items,
)
from bandcamp_extractor.bandcamp.service import get_stream_extractor, is_track_url
from bandcamp_extractor.bandcamp.stream_extractor import BandcampStreamExtractor

__all__ = [
    "get_json_data",
    "get_album_info_json",
    "BandcampStreamExtractor",
    "BandcampRelatedItemExtractor",
    "RelatedItemsCollector",
    "collect_related_items",
    "get_stream_extractor",
    "is_track_url",
]
