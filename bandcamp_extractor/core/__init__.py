"""
Core module for bandcamp-extractor.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs
    - downloader: Page fetching with retry/backoff

Usage:
    from bandcamp_extractor.core import (
        Config, load_config,
        RequestsDownloader,
        setup_logging, get_logger,
        BandcampExtractorError, ParsingError, ExtractionError
    )
"""

from bandcamp_extractor.core.config import (
    Config,
    ExtractionConfig,
    NetworkConfig,
    OutputConfig,
    load_config,
)
from bandcamp_extractor.core.downloader import Downloader, RequestsDownloader, Response
from bandcamp_extractor.core.exceptions import (
    BandcampExtractorError,
    ConfigError,
    ExtractionError,
    ExtractorStateError,
    FetchError,
    ParsingCause,
    ParsingError,
)
from bandcamp_extractor.core.logger import (
    get_logger,
    log_extraction_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "NetworkConfig",
    "OutputConfig",
    "ExtractionConfig",
    "load_config",
    # Downloader
    "Downloader",
    "RequestsDownloader",
    "Response",
    # Exceptions
    "BandcampExtractorError",
    "ConfigError",
    "FetchError",
    "ExtractionError",
    "ParsingError",
    "ParsingCause",
    "ExtractorStateError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_extraction_failure",
    "shutdown_logging",
]
