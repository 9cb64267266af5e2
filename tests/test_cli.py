"""Test the command-line interface"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bandcamp_extractor import __version__
from bandcamp_extractor.cli import cli

from conftest import SAMPLE_BODY, TRACK_URL, FakeDownloader, build_page

ALBUM_URL = "https://artist.bandcamp.com/track/actually-an-album"


@pytest.fixture
def pages(sample_payload):
    album_payload = dict(sample_payload, trackinfo=sample_payload["trackinfo"] * 2)
    return {
        TRACK_URL: build_page(sample_payload, SAMPLE_BODY),
        ALBUM_URL: build_page(album_payload, SAMPLE_BODY),
    }


@pytest.fixture
def run_cli(pages, tmp_path, monkeypatch):
    """Invoke the CLI with a fake downloader and logging left untouched"""
    monkeypatch.chdir(tmp_path)

    def _run(*args):
        with patch("bandcamp_extractor.cli.RequestsDownloader", return_value=FakeDownloader(pages)), \
                patch("bandcamp_extractor.cli.setup_logging"), \
                patch("bandcamp_extractor.cli.shutdown_logging"):
            return CliRunner().invoke(cli, list(args))
    return _run


class TestCli:
    """Test bcx"""

    def test_version(self, run_cli):
        result = run_cli("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_urls_shows_help(self, run_cli):
        result = run_cli()
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_single_track(self, run_cli):
        result = run_cli(TRACK_URL)

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 1
        assert data[0]["name"] == "Test Song"
        assert data[0]["url"] == TRACK_URL
        assert data[0]["licence"] == "All rights reserved ©"

    def test_failed_pages_set_exit_code(self, run_cli):
        result = run_cli(TRACK_URL, ALBUM_URL, "https://artist.bandcamp.com/album/lp", "--threads", "2")

        assert result.exit_code == 2
        data = json.loads(result.stdout)
        assert [item["name"] for item in data] == ["Test Song"]

    def test_failure_is_logged(self, run_cli):
        with patch("bandcamp_extractor.cli.log_extraction_failure") as mock_log:
            result = run_cli(ALBUM_URL)

        assert result.exit_code == 2
        mock_log.assert_called_once()
        url, reason = mock_log.call_args.args[1:]
        assert url == ALBUM_URL
        assert reason.startswith("ExtractionError")

    def test_missing_config_file(self, run_cli, tmp_path):
        result = run_cli(TRACK_URL, "--config", str(tmp_path / "missing.yaml"))
        assert result.exit_code == 1
