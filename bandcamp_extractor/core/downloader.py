"""
Page fetching for bandcamp-extractor.

Extractors never talk to the network themselves. They receive a Downloader
and call get() exactly once, from fetch_page(). All transport concerns live
here: headers, timeouts, retries with exponential backoff.

Retry Policy:
    - Connection errors and timeouts: retried
    - HTTP 429 and 5xx: retried
    - Any other HTTP status >= 400: FetchError immediately
    - Attempts exhausted: FetchError with the last status (if any)

Usage:
    from bandcamp_extractor.core.downloader import RequestsDownloader

    downloader = RequestsDownloader(config.network)
    html = downloader.get("https://artist.bandcamp.com/track/x").response_body
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

import requests

from bandcamp_extractor.core.config import NetworkConfig
from bandcamp_extractor.core.exceptions import FetchError
from bandcamp_extractor.core.logger import get_logger

logger = get_logger(__name__)


RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
BACKOFF_FACTOR = 2.0


@dataclass(frozen=True)
class Response:
    """
    A fetched page.

    Attributes:
        url: Final URL after redirects.
        status_code: HTTP status code.
        response_body: Decoded response text.
    """
    url: str
    status_code: int
    response_body: str


class Downloader(ABC):
    """Fetch collaborator used by extractors to GET a page as text."""

    @abstractmethod
    def get(self, url: str) -> Response:
        """
        Perform a GET request.

        Raises:
            FetchError: If the page could not be retrieved.
        """


class RequestsDownloader(Downloader):
    """
    Downloader backed by a shared requests.Session.

    The session sends browser-like headers, since Bandcamp answers 403 to
    many non-browser clients. One instance may be shared by several
    extractors running in different threads.

    Attributes:
        config: Network settings (user agent, timeout, retry policy).
        session: The underlying requests.Session.
    """

    def __init__(
        self,
        config: NetworkConfig | None = None,
        session: requests.Session | None = None
    ) -> None:
        self.config = config or NetworkConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": "https://bandcamp.com/",
            "Cache-Control": "no-cache",
        })

    def get(self, url: str) -> Response:
        """
        GET a page, retrying transient failures.

        Args:
            url: Page URL.

        Returns:
            Response with the decoded body.

        Raises:
            FetchError: On a non-retryable HTTP error, or once all attempts
                        for a retryable failure are used up.
        """
        delay = self.config.retry_delay
        last_error: FetchError | None = None

        for attempt in range(1, self.config.retries + 1):
            try:
                response = self.session.get(url, timeout=self.config.timeout)
            except requests.exceptions.RequestException as e:
                last_error = FetchError(
                    f"Request failed: {e}",
                    details={"url": url, "attempt": attempt, "original_error": str(e)}
                )
            else:
                if response.status_code < 400:
                    logger.debug(f"Fetched {url} ({response.status_code}, attempt {attempt})")
                    return Response(
                        url=response.url or url,
                        status_code=response.status_code,
                        response_body=response.text
                    )

                last_error = FetchError(
                    f"HTTP {response.status_code} for {url}",
                    details={"url": url, "attempt": attempt},
                    status_code=response.status_code
                )
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    raise last_error

            if attempt < self.config.retries:
                logger.warning(
                    f"Fetch attempt {attempt}/{self.config.retries} failed for {url}: "
                    f"{last_error.message}; retrying in {delay:.1f}s"
                )
                time.sleep(delay)
                delay *= BACKOFF_FACTOR

        if last_error is None:
            raise FetchError(
                f"No fetch attempted for {url}",
                details={"url": url, "retries": self.config.retries}
            )
        raise last_error
