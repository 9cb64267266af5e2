"""
Logging configuration for bandcamp-extractor.

This module sets up the logging system with multiple outputs:
    - Console: Real-time messages with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - extraction_failures.log: URLs of pages that could not be extracted

File outputs are only created when a log directory is configured.

Usage:
    from bandcamp_extractor.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Fetching page")
    log_extraction_failure(logger, url, "Page is actually an album")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


LOG_FULL_FILENAME = "log_full"
LOG_ERRORS_FILENAME = "log_errors"
EXTRACTION_FAILURES_FILENAME = "extraction_failures"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries whose chatter would drown the extractor's own messages
NOISY_LOGGERS = ("urllib3", "requests", "charset_normalizer")


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking tqdm progress bars.

    tqdm progress bars write to stderr and use carriage returns to update in-place.
    This handler uses tqdm.write() which properly coordinates with active progress bars,
    so messages appear above the bar instead of corrupting it.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


class ExtractionFailedPageHandler(logging.Handler):
    """
    Handler that captures failed pages for the extraction failures report.

    This handler listens for log records carrying page failure information
    and writes them to extraction_failures.log in a simple, human-readable
    format that can be fed back to the CLI:

        https://artist.bandcamp.com/track/some-track
        # ExtractionError: Page is actually an album, not a track

    The handler looks for specific extra fields in log records:
        - 'extraction_failed_url': The page URL
        - 'extraction_failed_reason': Why extraction failed

    Only records containing these fields are written to the report.

    Attributes:
        report_path: Path to the extraction_failures.log file.
        report_file: Open file handle (opened by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """
        Open the report file for writing.

        Called by setup_logging() after handler is created.
        File is opened in write mode (overwrites existing content).
        """
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "extraction_failed_url"):
            return

        if self.report_file is None:
            return

        try:
            url = getattr(record, "extraction_failed_url", "")
            reason = getattr(record, "extraction_failed_reason", "")
            self.acquire()
            try:
                self.report_file.write(f"{url}\n")
                self.report_file.write(f"# {reason}\n")
                self.report_file.flush()
            finally:
                self.release()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """
        Close the report file handle.

        Called automatically when logging is shut down.
        Safe to call multiple times.
        """
        if self.report_file is not None:
            self.report_file.close()
            self.report_file = None
        super().close()


def setup_logging(log_dir: Path | None = None, level: str = "INFO") -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any page is fetched.

    Args:
        log_dir: Directory where log files will be created, or None for
                 console-only logging.
        level: Console log level name (DEBUG, INFO, WARNING, ERROR).
               File logs always capture DEBUG.

    Behavior:
        1. Configure root logger level to DEBUG
        2. Create console handler (TqdmLoggingHandler) at the requested level
        3. If log_dir is given:
           - Create log_dir if it doesn't exist
           - Add log_full_{timestamp}.log (DEBUG, full format)
           - Add log_errors_{timestamp}.log (ERROR+ via ErrorOnlyFilter)
           - Add extraction_failures_{timestamp}.log (ExtractionFailedPageHandler)
        4. Silence noisy third-party loggers below WARNING

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before starting any worker threads.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

        full_handler = logging.FileHandler(
            log_dir / f"{LOG_FULL_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
        )
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(full_handler)

        error_handler = logging.FileHandler(
            log_dir / f"{LOG_ERRORS_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
        )
        error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
        error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        error_handler.addFilter(ErrorOnlyFilter())
        root_logger.addHandler(error_handler)

        failures_handler = ExtractionFailedPageHandler(
            log_dir / f"{EXTRACTION_FAILURES_FILENAME}_{timestamp}.log"
        )
        failures_handler.open()
        root_logger.addHandler(failures_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    This is a convenience wrapper around logging.getLogger() that ensures
    consistent logger naming throughout the application.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'bandcamp_extractor.bandcamp.related'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called will have no
        handlers of their own and propagate to whatever the root has.
    """
    return logging.getLogger(name)


def log_extraction_failure(logger: logging.Logger, url: str, reason: str) -> None:
    """
    Log a page whose extraction failed.

    Logs an ERROR level message and attaches the extra fields that
    ExtractionFailedPageHandler uses to write extraction_failures.log.

    Args:
        logger: The logger to use for the message.
        url: The page URL.
        reason: Description of why extraction failed.

    Example:
        log_extraction_failure(
            logger,
            url="https://artist.bandcamp.com/track/x",
            reason="ExtractionError: Page is actually an album, not a track"
        )
    """
    logger.error(
        f"Extraction failed: {url} - {reason}",
        extra={
            "extraction_failed_url": url,
            "extraction_failed_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes and closes all handlers on the root logger, then removes them.
    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.flush()
        handler.close()
        root_logger.removeHandler(handler)
