"""
Exception classes for bandcamp-extractor.

This module defines all custom exceptions used throughout the application.
Each exception is designed to provide clear, actionable error messages
and to distinguish between different failure modes.

Exception Hierarchy:
    BandcampExtractorError (base)
        ConfigError - Configuration file issues
        FetchError - Page could not be downloaded
        ExtractionError - Page is not what the extractor expects
            ParsingError - Embedded JSON or DOM structure is missing/malformed
        ExtractorStateError - Accessor called before/after a failed fetch
"""

from enum import Enum


class BandcampExtractorError(Exception):
    """
    Base exception for all bandcamp-extractor errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all extractor errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URLs, field names).

    Example:
        try:
            extractor.fetch_page()
        except BandcampExtractorError as e:
            logger.error(f"Extraction failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL of the page involved in the error
                     - 'field': Payload field or CSS class that was inspected
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(BandcampExtractorError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - Explicit config path does not exist
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., negative timeout, zero threads)

    Example:
        raise ConfigError(
            "'network.timeout' must be a positive number",
            details={'field': 'network.timeout', 'value': -1}
        )
    """
    pass


class FetchError(BandcampExtractorError):
    """
    Raised when a page cannot be downloaded.

    Raised by the downloader only after its retry policy is exhausted,
    or immediately for client errors that retrying cannot fix (404, 403).

    Attributes:
        status_code: HTTP status of the last response, or None when no
                     response was received (DNS failure, timeout).

    Example:
        raise FetchError(
            "Page not found",
            details={'url': url},
            status_code=404
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class ExtractionError(BandcampExtractorError):
    """
    Raised when a fetched page violates what the extractor expects of it.

    The canonical case is a multi-track release (album) handed to the
    track extractor: the embedded payload lists more than one track.
    This is raised once, from fetch_page(), and leaves the extractor
    in the FAILED state.

    Example:
        raise ExtractionError(
            "Page is actually an album, not a track",
            details={'url': url, 'track_count': 12}
        )
    """
    pass


class ParsingCause(Enum):
    """Why a structural expectation about the page was not met."""
    MISSING = "missing"
    MALFORMED = "malformed"


class ParsingError(ExtractionError):
    """
    Raised when the embedded JSON payload or the DOM lacks a required piece.

    Raised at the lowest point of detection. The cause tells the caller
    whether the data was absent (site changed, wrong page class) or present
    but unusable (invalid JSON, URL without a host).

    Attributes:
        cause: ParsingCause.MISSING or ParsingCause.MALFORMED.

    Example:
        raise ParsingError(
            "JSON does not exist",
            cause=ParsingCause.MISSING,
            details={'attribute': 'data-tralbum'}
        )
    """

    def __init__(
        self,
        message: str,
        cause: ParsingCause = ParsingCause.MISSING,
        details: dict | None = None
    ) -> None:
        super().__init__(message, details)
        self.cause = cause

    @property
    def is_missing(self) -> bool:
        return self.cause is ParsingCause.MISSING

    @property
    def is_malformed(self) -> bool:
        return self.cause is ParsingCause.MALFORMED


class ExtractorStateError(BandcampExtractorError):
    """
    Raised when an extractor is used outside its valid lifecycle state.

    Accessors require a successfully fetched page. Calling them on a fresh
    extractor, or on one whose fetch failed, is a programming error.
    """
    pass
