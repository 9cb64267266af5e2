"""
Data models for extracted stream pages.

This module defines immutable dataclasses and enums describing what an
extractor reports about one track page: its playable sources, related
content and the aggregated metadata record.

Design Decisions:
    - All dataclasses are frozen (immutable); a page is fetched once
      and its metadata never changes afterwards
    - Sequences are stored as tuples for the same reason
    - Models know nothing about HTML or the embedded JSON payload

Usage:
    from bandcamp_extractor.stream.models import AudioStream, MediaFormat

    stream = AudioStream(url="https://...", media_format=MediaFormat.MP3, average_bitrate=128)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class MediaFormat(Enum):
    """Container/codec of a playable source, with its MIME type and file suffix."""
    MP3 = ("MP3", "audio/mpeg", "mp3")

    def __init__(self, format_name: str, mime_type: str, suffix: str) -> None:
        self.format_name = format_name
        self.mime_type = mime_type
        self.suffix = suffix


class StreamType(Enum):
    """Kind of content a stream page carries."""
    NONE = "none"
    AUDIO_STREAM = "audio_stream"
    VIDEO_STREAM = "video_stream"


@dataclass(frozen=True)
class AudioStream:
    """
    A single playable audio source.

    Attributes:
        url: Direct URL of the audio file.
        media_format: Container/codec of the file.
        average_bitrate: Nominal bitrate in kbit/s.
    """
    url: str
    media_format: MediaFormat
    average_bitrate: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "format": self.media_format.format_name,
            "mime_type": self.media_format.mime_type,
            "bitrate": self.average_bitrate,
        }


@dataclass(frozen=True)
class RelatedItem:
    """
    Lightweight descriptor of recommended content found on a track page.

    This is a weak discovery signal, not an authoritative link list:
    only name and url are validated.

    Attributes:
        name: Release title as displayed. Never empty.
        url: Absolute URL of the release. Never empty.
        thumbnail_url: Cover image URL, or "" when the fragment has none.
        uploader_name: Artist name without the "by " prefix, or "".
    """
    name: str
    url: str
    thumbnail_url: str = ""
    uploader_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "uploader_name": self.uploader_name,
        }


@dataclass(frozen=True)
class TrackMetadata:
    """
    Everything an extractor derived from one track page.

    Built by extract_metadata() after a successful fetch, by calling every
    accessor of the extractor once.

    Attributes:
        name: Track title.
        url: Canonical track URL, always https.
        uploader_url: Root URL of the artist's site, e.g. "https://artist.bandcamp.com/".
        uploader_name: Artist name.
        textual_upload_date: Publish date exactly as the page states it, or None.
        upload_date: Parsed publish date, or None when absent/unparseable.
        thumbnail_url: Cover image URL, or "" when the track has no art.
        uploader_avatar_url: Artist photo URL, or "".
        description: About, lyrics and credits joined by blank lines.
        category: First tag of the page (the artist's genre).
        licence: Human-readable license label, "Unknown" when unmapped.
        tags: All tags in document order, duplicates kept.
        audio_streams: Exactly one MP3 source.
        related_items: Recommended releases that could be parsed.
        stream_type: Always StreamType.AUDIO_STREAM for track pages.
    """
    name: str
    url: str
    uploader_url: str
    uploader_name: str
    textual_upload_date: str | None
    upload_date: datetime | None
    thumbnail_url: str
    uploader_avatar_url: str
    description: str
    category: str
    licence: str
    tags: tuple[str, ...] = field(default_factory=tuple)
    audio_streams: tuple[AudioStream, ...] = field(default_factory=tuple)
    related_items: tuple[RelatedItem, ...] = field(default_factory=tuple)
    stream_type: StreamType = StreamType.AUDIO_STREAM

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Dates are rendered in ISO 8601; enums by value.
        """
        return {
            "name": self.name,
            "url": self.url,
            "uploader_url": self.uploader_url,
            "uploader_name": self.uploader_name,
            "textual_upload_date": self.textual_upload_date,
            "upload_date": self.upload_date.isoformat() if self.upload_date else None,
            "thumbnail_url": self.thumbnail_url,
            "uploader_avatar_url": self.uploader_avatar_url,
            "description": self.description,
            "category": self.category,
            "licence": self.licence,
            "tags": list(self.tags),
            "audio_streams": [s.to_dict() for s in self.audio_streams],
            "related_items": [r.to_dict() for r in self.related_items],
            "stream_type": self.stream_type.value,
        }
