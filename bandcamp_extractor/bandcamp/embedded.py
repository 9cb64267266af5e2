"""
Locating the JSON payload Bandcamp embeds in its server-rendered HTML.

Track and album pages carry their metadata in an HTML attribute rather
than in visible markup:

    <script data-tralbum="{&quot;url&quot;: ..., &quot;trackinfo&quot;: [...]}">

The attribute value is HTML-escaped JSON; BeautifulSoup unescapes it while
parsing, so the value can be handed to json.loads() directly.
"""

import json
from typing import Any

from bs4 import BeautifulSoup

from bandcamp_extractor.core.exceptions import ParsingCause, ParsingError
from bandcamp_extractor.core.logger import get_logger

logger = get_logger(__name__)

TRALBUM_ATTRIBUTE = "data-tralbum"


def get_json_data(html: str | BeautifulSoup, attribute: str) -> dict[str, Any]:
    """
    Find the first element carrying `attribute` and parse its value as JSON.

    Args:
        html: Raw page HTML, or an already parsed document.
        attribute: Name of the attribute holding the JSON object.

    Returns:
        The parsed JSON object.

    Raises:
        ParsingError: cause MISSING when no element carries the attribute,
                      cause MALFORMED when its value is not a JSON object.
    """
    document = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
    element = document.find(attrs={attribute: True})

    if element is None:
        raise ParsingError(
            "JSON does not exist",
            cause=ParsingCause.MISSING,
            details={"attribute": attribute}
        )

    raw = element.get(attribute)
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParsingError(
            "Faulty JSON; page likely does not contain album data",
            cause=ParsingCause.MALFORMED,
            details={"attribute": attribute, "original_error": str(e)}
        ) from e

    if not isinstance(data, dict):
        raise ParsingError(
            f"Expected a JSON object in '{attribute}', got {type(data).__name__}",
            cause=ParsingCause.MALFORMED,
            details={"attribute": attribute}
        )

    logger.debug(f"Parsed '{attribute}' payload with {len(data)} top-level keys")
    return data


def get_album_info_json(html: str | BeautifulSoup) -> dict[str, Any]:
    """
    Get the JSON that holds a track's or album's metadata from a page.

    Raises:
        ParsingError: See get_json_data().
    """
    return get_json_data(html, TRALBUM_ATTRIBUTE)
