"""
Stream extractor capability interface.

A StreamExtractor binds to exactly one page URL. Its lifecycle is an
explicit state machine:

    CREATED --fetch_page() ok--> FETCHED   (terminal, accessors usable)
    CREATED --fetch_page() raises--> FAILED (terminal, accessors unusable)

Each supported content source provides one concrete subclass; the right one
is chosen when the extractor is constructed, so callers only ever see this
interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

from bandcamp_extractor.core.downloader import Downloader
from bandcamp_extractor.core.exceptions import ExtractorStateError
from bandcamp_extractor.core.logger import get_logger
from bandcamp_extractor.stream.models import (
    AudioStream,
    RelatedItem,
    StreamType,
    TrackMetadata,
)

logger = get_logger(__name__)


class ExtractorState(Enum):
    CREATED = "created"
    FETCHED = "fetched"
    FAILED = "failed"


class StreamExtractor(ABC):
    """
    Base class for single-stream page extractors.

    Subclasses implement on_fetch_page() to download and parse the page,
    and the accessor methods to derive fields from what was parsed.
    Accessors are only valid in the FETCHED state; they call
    assert_page_fetched() first.

    Attributes:
        url: The page URL this extractor is bound to.
        downloader: Fetch collaborator used once by fetch_page().
        state: Current lifecycle state.
    """

    def __init__(self, url: str, downloader: Downloader) -> None:
        self.url = url
        self.downloader = downloader
        self.state = ExtractorState.CREATED

    def fetch_page(self) -> None:
        """
        Download and parse the page, then validate it.

        Calling this again after a successful fetch does nothing.

        Raises:
            ExtractorStateError: If a previous fetch failed.
            FetchError: If the downloader could not retrieve the page.
            ExtractionError: If the page is not a valid page for this extractor.
        """
        if self.state is ExtractorState.FETCHED:
            return
        if self.state is ExtractorState.FAILED:
            raise ExtractorStateError(
                "Page fetch already failed; create a new extractor",
                details={"url": self.url}
            )

        try:
            self.on_fetch_page(self.downloader)
        except Exception:
            self.state = ExtractorState.FAILED
            raise

        self.state = ExtractorState.FETCHED
        logger.debug(f"Fetched page {self.url}")

    def assert_page_fetched(self) -> None:
        if self.state is not ExtractorState.FETCHED:
            raise ExtractorStateError(
                f"Page is not fetched (state: {self.state.value})",
                details={"url": self.url, "state": self.state.value}
            )

    @property
    def is_fetched(self) -> bool:
        return self.state is ExtractorState.FETCHED

    @abstractmethod
    def on_fetch_page(self, downloader: Downloader) -> None:
        """Fetch and parse the page. Runs at most once per instance."""

    @abstractmethod
    def get_name(self) -> str: ...

    @abstractmethod
    def get_url(self) -> str: ...

    @abstractmethod
    def get_uploader_url(self) -> str: ...

    @abstractmethod
    def get_uploader_name(self) -> str: ...

    @abstractmethod
    def get_textual_upload_date(self) -> str | None: ...

    @abstractmethod
    def get_upload_date(self) -> datetime | None: ...

    @abstractmethod
    def get_thumbnail_url(self) -> str: ...

    @abstractmethod
    def get_uploader_avatar_url(self) -> str: ...

    @abstractmethod
    def get_description(self) -> str: ...

    @abstractmethod
    def get_category(self) -> str: ...

    @abstractmethod
    def get_licence(self) -> str: ...

    @abstractmethod
    def get_tags(self) -> list[str]: ...

    @abstractmethod
    def get_audio_streams(self) -> list[AudioStream]: ...

    @abstractmethod
    def get_video_streams(self) -> list: ...

    @abstractmethod
    def get_video_only_streams(self) -> list: ...

    @abstractmethod
    def get_stream_type(self) -> StreamType: ...

    @abstractmethod
    def get_related_items(self) -> list[RelatedItem]: ...


def extract_metadata(extractor: StreamExtractor) -> TrackMetadata:
    """
    Fetch the page (if needed) and collect every field into a TrackMetadata.

    Fields with a documented fallback never raise; any other structural
    problem propagates as the ParsingError raised by its accessor.

    Args:
        extractor: A CREATED or FETCHED extractor.

    Returns:
        TrackMetadata: The complete, immutable record.

    Raises:
        FetchError: If the page could not be downloaded.
        ExtractionError: If the page fails validation or a required field is missing.
    """
    extractor.fetch_page()

    return TrackMetadata(
        name=extractor.get_name(),
        url=extractor.get_url(),
        uploader_url=extractor.get_uploader_url(),
        uploader_name=extractor.get_uploader_name(),
        textual_upload_date=extractor.get_textual_upload_date(),
        upload_date=extractor.get_upload_date(),
        thumbnail_url=extractor.get_thumbnail_url(),
        uploader_avatar_url=extractor.get_uploader_avatar_url(),
        description=extractor.get_description(),
        category=extractor.get_category(),
        licence=extractor.get_licence(),
        tags=tuple(extractor.get_tags()),
        audio_streams=tuple(extractor.get_audio_streams()),
        related_items=tuple(extractor.get_related_items()),
        stream_type=extractor.get_stream_type(),
    )
