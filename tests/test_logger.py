"""Test logging setup and failure reports"""

import logging

import pytest

from bandcamp_extractor.core.logger import (
    ExtractionFailedPageHandler,
    get_logger,
    log_extraction_failure,
    setup_logging,
    shutdown_logging,
)


@pytest.fixture
def restore_root_logger():
    """Keep setup_logging() from leaking handlers into other tests"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    shutdown_logging()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestLogger:
    """Test logger configuration"""

    def test_failure_report_format(self, tmp_path):
        handler = ExtractionFailedPageHandler(tmp_path / "failures.log")
        handler.open()
        logger = logging.getLogger("test.failure_report")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            logger.error("unrelated message")
            log_extraction_failure(logger, "https://a.bandcamp.com/track/x", "ExtractionError: album")
        finally:
            logger.removeHandler(handler)
            handler.close()

        assert (tmp_path / "failures.log").read_text(encoding="utf-8") == (
            "https://a.bandcamp.com/track/x\n# ExtractionError: album\n"
        )

    def test_setup_creates_log_files(self, tmp_path, restore_root_logger):
        log_dir = tmp_path / "logs"
        setup_logging(log_dir, level="DEBUG")

        get_logger("bandcamp_extractor.test").error("boom")
        log_extraction_failure(get_logger("bandcamp_extractor.test"), "https://x/track/y", "FetchError: 404")
        shutdown_logging()

        names = sorted(p.name.rsplit("_", 2)[0] for p in log_dir.iterdir())
        assert names == ["extraction_failures", "log_errors", "log_full"]
        failures = next(log_dir.glob("extraction_failures_*.log")).read_text(encoding="utf-8")
        assert failures.startswith("https://x/track/y\n")
        errors = next(log_dir.glob("log_errors_*.log")).read_text(encoding="utf-8")
        assert "boom" in errors

    def test_console_only(self, restore_root_logger):
        setup_logging(None)
        assert len(restore_root_logger.handlers) == 1
