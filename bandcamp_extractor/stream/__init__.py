"""
Stream module for bandcamp-extractor.

Source-independent pieces of stream extraction:
    - StreamExtractor: Capability interface with explicit lifecycle state
    - extract_metadata: Collects every accessor into a TrackMetadata
    - Models: AudioStream, RelatedItem, TrackMetadata, MediaFormat, StreamType
"""

from bandcamp_extractor.stream.base import ExtractorState, StreamExtractor, extract_metadata
from bandcamp_extractor.stream.models import (
    AudioStream,
    MediaFormat,
    RelatedItem,
    StreamType,
    TrackMetadata,
)

__all__ = [
    "StreamExtractor",
    "ExtractorState",
    "extract_metadata",
    "AudioStream",
    "MediaFormat",
    "RelatedItem",
    "StreamType",
    "TrackMetadata",
]
