"""
bandcamp-extractor: Extract structured metadata from Bandcamp track pages.

This package fetches a single Bandcamp track page and turns its
server-rendered HTML into an immutable TrackMetadata record: title,
artist, publish date, cover art, license, description, tags, the MP3
stream URL and recommended releases.

Architecture:
    A page goes through three steps:

    FETCH (core/downloader.py):
        - GET the page with browser-like headers
        - Retry transient failures with exponential backoff

    PARSE (bandcamp/embedded.py):
        - Parse the HTML into a BeautifulSoup tree
        - Locate the data-tralbum attribute and parse its JSON payload
        - Reject album pages (more than one track) with ExtractionError

    DERIVE (bandcamp/stream_extractor.py, bandcamp/related.py):
        - Compute each field from the payload and the DOM, applying
          per-field fallbacks
        - Collect recommended releases, skipping malformed fragments

Modules:
    core/       - Configuration, downloader, logging, exceptions
    stream/     - Extractor interface and data models
    bandcamp/   - Bandcamp track extraction
    utils/      - Parallel processing helper
    cli.py      - Command-line interface

Usage:
    Command Line:
        bcx "https://artist.bandcamp.com/track/song"
        bcx URL1 URL2 --threads 8

    Python API:
        from bandcamp_extractor import (
            RequestsDownloader, extract_metadata, get_stream_extractor
        )

        extractor = get_stream_extractor(url, RequestsDownloader())
        metadata = extract_metadata(extractor)
        print(metadata.name, metadata.audio_streams[0].url)

Dependencies:
    - requests: Page fetching
    - beautifulsoup4: HTML parsing
    - python-dateutil: Publish date parsing
    - click / rich-click: CLI framework and colors
    - tqdm: Progress bars
    - pyyaml: Configuration file parsing
"""

__version__ = "0.1.0"
__author__ = "bandcamp-extractor"
__license__ = "MIT"

# Convenience imports for common usage
from bandcamp_extractor.core import (
    BandcampExtractorError,
    Config,
    ConfigError,
    ExtractionError,
    ExtractorStateError,
    FetchError,
    ParsingCause,
    ParsingError,
    RequestsDownloader,
    get_logger,
    load_config,
    setup_logging,
)
from bandcamp_extractor.bandcamp import BandcampStreamExtractor, get_stream_extractor
from bandcamp_extractor.stream import (
    AudioStream,
    RelatedItem,
    StreamExtractor,
    TrackMetadata,
    extract_metadata,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "RequestsDownloader",
    "setup_logging",
    "get_logger",
    # Exceptions
    "BandcampExtractorError",
    "ConfigError",
    "FetchError",
    "ExtractionError",
    "ParsingError",
    "ParsingCause",
    "ExtractorStateError",
    # Extraction
    "StreamExtractor",
    "BandcampStreamExtractor",
    "get_stream_extractor",
    "extract_metadata",
    # Models
    "TrackMetadata",
    "AudioStream",
    "RelatedItem",
]
