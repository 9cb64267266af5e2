"""
Command-line interface for bandcamp-extractor.

This module implements the CLI using Click, extracting metadata for one or
more Bandcamp track pages and printing it as JSON.
rich-click is used for the help output colors.

Usage:
    # Single track
    bcx "https://artist.bandcamp.com/track/song"

    # Several tracks, 8 pages at a time, with file logs
    bcx URL1 URL2 URL3 --threads 8 --log-dir ./logs

    # Explicit configuration file
    bcx --config ~/bcx.yaml "https://..."

Output:
    A JSON array on stdout, one object per successfully extracted page,
    in the order the URLs were given. Log messages go to stderr.

Exit Codes:
    0   every page was extracted
    1   configuration error
    2   at least one page failed
    130 interrupted
"""

import json
import sys
from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100

from bandcamp_extractor import __version__
from bandcamp_extractor.bandcamp import get_stream_extractor
from bandcamp_extractor.core import (
    BandcampExtractorError,
    Config,
    ConfigError,
    Downloader,
    RequestsDownloader,
    get_logger,
    load_config,
    log_extraction_failure,
    setup_logging,
    shutdown_logging,
)
from bandcamp_extractor.stream import TrackMetadata, extract_metadata
from bandcamp_extractor.utils import run_in_parallel

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PAGES_FAILED = 2
EXIT_INTERRUPTED = 130


@click.command()
@click.argument("urls", nargs=-1, metavar="<track-url>...")
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml if present)"
)
@click.option(
    "--threads",
    type=click.IntRange(min=1),
    default=None,
    help="Pages fetched in parallel (overrides extraction.threads)"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Write log files here (overrides output.log_directory)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug messages on the console"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    urls: tuple[str, ...],
    config_path: Optional[Path],
    threads: Optional[int],
    log_dir: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    bandcamp-extractor: Extract metadata from Bandcamp track pages.

    Prints title, artist, dates, license, description, tags, the MP3
    stream URL and recommended releases as JSON.

    \b
    USAGE:
        bcx "https://artist.bandcamp.com/track/song"
        bcx URL1 URL2 --threads 8 --log-dir ./logs
    """
    if version:
        click.echo(f"bandcamp-extractor {__version__}")
        ctx.exit(0)

    if not urls:
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(
        log_dir if log_dir is not None else config.output.log_directory,
        level="DEBUG" if verbose else "INFO"
    )

    try:
        exit_code = _run_extraction(list(urls), config, threads or config.extraction.threads)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        exit_code = EXIT_INTERRUPTED
    finally:
        shutdown_logging()

    sys.exit(exit_code)


def _extract_one(url: str, downloader: Downloader) -> TrackMetadata:
    """Run one page through its own extractor."""
    extractor = get_stream_extractor(url, downloader)
    return extract_metadata(extractor)


def _run_extraction(urls: list[str], config: Config, num_threads: int) -> int:
    """
    Extract every URL and print the successful results as a JSON array.

    Args:
        urls: Track page URLs, in output order.
        config: Loaded configuration.
        num_threads: Parallel fetches.

    Returns:
        Process exit code.
    """
    downloader = RequestsDownloader(config.network)
    logger.info(f"Extracting {len(urls)} page(s)")

    results = run_in_parallel(
        lambda url: _extract_one(url, downloader),
        urls,
        num_threads=min(num_threads, len(urls)),
        description="Extracting",
        show_progress=len(urls) > 1 and sys.stderr.isatty()
    )

    extracted: list[dict] = []
    failed = 0
    for url, result in results:
        if isinstance(result, BandcampExtractorError):
            log_extraction_failure(logger, url, f"{type(result).__name__}: {result.message}")
            failed += 1
        elif isinstance(result, Exception):
            logger.error(f"Unexpected error for {url}", exc_info=result)
            log_extraction_failure(logger, url, f"{type(result).__name__}: {result}")
            failed += 1
        else:
            extracted.append(result.to_dict())

    click.echo(json.dumps(extracted, ensure_ascii=False, indent=2))

    logger.info(f"Extracted {len(extracted)}/{len(urls)} page(s)")
    return EXIT_PAGES_FAILED if failed else EXIT_OK


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `bcx` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
