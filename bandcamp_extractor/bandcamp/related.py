"""
Related content discovery on Bandcamp track pages.

Track pages render a "you may also like" strip of recommended releases:

    <li class="recommended-album">
      <a class="album-link" href="https://other.bandcamp.com/album/x">
        <img class="album-art" src="https://f4.bcbits.com/img/a123_9.jpg">
        <span class="release-title">Release</span>
        <span class="by-artist">by Other</span>
      </a>
    </li>

Each fragment is parsed on its own. A fragment that does not yield a name
and a URL is dropped; the rest of the strip is still collected.
"""

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from bandcamp_extractor.bandcamp.helpers import element_text
from bandcamp_extractor.core.exceptions import ParsingCause, ParsingError
from bandcamp_extractor.core.logger import get_logger
from bandcamp_extractor.stream.models import RelatedItem

logger = get_logger(__name__)

RECOMMENDED_CLASS = "recommended-album"


def _first_text(fragment: Tag, class_name: str) -> str:
    element = fragment.find(class_=class_name)
    return element_text(element) if element is not None else ""


def _first_attr(fragment: Tag, class_name: str, attribute: str) -> str:
    element = fragment.find(class_=class_name)
    if element is None:
        return ""
    value = element.get(attribute)
    return value.strip() if isinstance(value, str) else ""


class BandcampRelatedItemExtractor:
    """Extracts one RelatedItem from a recommended-album fragment."""

    def __init__(self, fragment: Tag, base_url: str = "") -> None:
        self.fragment = fragment
        self.base_url = base_url

    def get_name(self) -> str:
        name = _first_text(self.fragment, "release-title")
        if not name:
            raise ParsingError("Recommended release has no title", cause=ParsingCause.MISSING)
        return name

    def get_url(self) -> str:
        href = _first_attr(self.fragment, "album-link", "href")
        if not href:
            raise ParsingError("Recommended release has no link", cause=ParsingCause.MISSING)
        try:
            url = urljoin(self.base_url, href)
        except ValueError as e:
            raise ParsingError(
                f"Recommended release link is malformed: {href}",
                cause=ParsingCause.MALFORMED,
                details={"href": href, "original_error": str(e)}
            ) from e
        if not url.startswith(("http://", "https://")):
            raise ParsingError(
                f"Recommended release link is not absolute: {href}",
                cause=ParsingCause.MALFORMED,
                details={"href": href}
            )
        return url

    def get_thumbnail_url(self) -> str:
        return _first_attr(self.fragment, "album-art", "src")

    def get_uploader_name(self) -> str:
        artist = _first_text(self.fragment, "by-artist")
        return artist[3:] if artist.startswith("by ") else artist

    def extract(self) -> RelatedItem:
        """
        Build the descriptor.

        Raises:
            ParsingError: If the fragment has no title or no usable link.
        """
        return RelatedItem(
            name=self.get_name(),
            url=self.get_url(),
            thumbnail_url=self.get_thumbnail_url(),
            uploader_name=self.get_uploader_name(),
        )


class RelatedItemsCollector:
    """
    Accumulates related items, keeping failures out of the result.

    Attributes:
        items: Successfully extracted items, in commit order.
        errors: ParsingErrors of the fragments that were dropped.
    """

    def __init__(self) -> None:
        self.items: list[RelatedItem] = []
        self.errors: list[ParsingError] = []

    def commit(self, extractor: BandcampRelatedItemExtractor) -> None:
        try:
            self.items.append(extractor.extract())
        except ParsingError as e:
            logger.debug(f"Skipping recommended release: {e.message}")
            self.errors.append(e)


def collect_related_items(document: BeautifulSoup, base_url: str = "") -> RelatedItemsCollector:
    """
    Scan a track page for recommended releases.

    Args:
        document: Parsed track page.
        base_url: Page URL, used to resolve relative links.

    Returns:
        The collector, holding items in document order plus the errors of
        the fragments that were skipped.
    """
    collector = RelatedItemsCollector()
    for fragment in document.find_all(class_=RECOMMENDED_CLASS):
        collector.commit(BandcampRelatedItemExtractor(fragment, base_url))

    if collector.errors:
        logger.warning(
            f"Skipped {len(collector.errors)} malformed recommended release(s) on {base_url or 'page'}"
        )
    return collector
