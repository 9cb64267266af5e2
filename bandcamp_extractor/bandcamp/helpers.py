"""
Stateless helpers for Bandcamp extraction.

Every function here is pure: no I/O, no shared state.
"""

from datetime import datetime
from typing import Any, Iterable

from bs4 import Tag
from dateutil import parser as date_parser

IMAGE_URL_TEMPLATE = "https://f4.bcbits.com/img/{prefix}{image_id}_{size}.jpg"
# Size code 10 is the large (1200px) variant
LARGE_IMAGE_SIZE = 10

UNKNOWN_LICENSE = "Unknown"

# Mapping observed in an artist account's license picker; 7 is unused
LICENSES: dict[int, str] = {
    1: "All rights reserved ©",
    2: "CC BY-NC-ND 3.0",
    3: "CC BY-NC-SA 3.0",
    4: "CC BY-NC 3.0",
    5: "CC BY-ND 3.0",
    6: "CC BY 3.0",
    8: "CC BY-SA 3.0",
}


def parse_date(text: str | None) -> datetime | None:
    """
    Parse a Bandcamp date string such as "16 Aug 2019 00:00:00 GMT".

    Args:
        text: Date text from the embedded payload, or None.

    Returns:
        A timezone-aware datetime when the text carries a zone, a naive one
        otherwise, or None when text is absent or cannot be parsed.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def get_image_url(image_id: int | str, album: bool) -> str:
    """
    Build the URL of the large variant of a Bandcamp image.

    Args:
        image_id: Numeric image id (art_id, image_id, ...).
        album: True for release artwork ("a" prefix), False for other images
               such as artist photos.

    Returns:
        e.g. "https://f4.bcbits.com/img/a1234567890_10.jpg"
    """
    return IMAGE_URL_TEMPLATE.format(
        prefix="a" if album else "",
        image_id=image_id,
        size=LARGE_IMAGE_SIZE,
    )


def license_label(code: Any) -> str:
    """
    Map a license_type code to its label.

    Total over any input: unmapped integers (0, 7, negatives), None and
    non-integers all give "Unknown".
    """
    if not isinstance(code, int) or isinstance(code, bool):
        return UNKNOWN_LICENSE
    return LICENSES.get(code, UNKNOWN_LICENSE)


def non_empty_and_null_join(delimiter: str, values: Iterable[Any]) -> str:
    """
    Join the values that are non-empty strings, in order.

    Anything else (None, numbers, lists) is skipped, so the join never fails.

    Example:
        non_empty_and_null_join("\\n\\n", ["A", "", None, "C"])  # "A\\n\\nC"
    """
    return delimiter.join(value for value in values if isinstance(value, str) and value)


def element_text(element: Tag) -> str:
    """Text of an element and its descendants, whitespace collapsed to single spaces."""
    return " ".join(element.get_text(" ").split())
