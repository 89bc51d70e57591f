"""Quantity marker codec for collapsed chat lines.

A collapsed line carries a trailing colored marker, e.g.
``"Nothing interesting happens.<col=ff0000> x 3"``. The helpers here find,
strip and re-append it so that ``strip_quantity(append_quantity(t, n))``
always gives back ``(t, n)``.
"""

from __future__ import annotations

from typing import Tuple

from core.config import DEFAULT_COUNT_COLOR
from core.text import CLOSING_COLOR_TAG, color_tag, remove_tags

QUANTITY_PREFIX = " x "
QUANTITY_DEFAULT = 1


def _marker_prefix(color: str) -> str:
    return color_tag(color) + QUANTITY_PREFIX


def find_quantity(text: str, color: str = DEFAULT_COUNT_COLOR) -> int:
    """Return the count carried by ``text``, or 1 when it has no marker."""

    prefix = _marker_prefix(color)
    start = text.rfind(prefix)
    if start < 0:
        return QUANTITY_DEFAULT
    digits = remove_tags(text[start + len(prefix):])
    # Only the canonical form append_quantity writes counts as a marker.
    if not (digits.isascii() and digits.isdigit()) or str(int(digits)) != digits:
        return QUANTITY_DEFAULT
    return int(digits)


def strip_quantity(text: str, color: str = DEFAULT_COUNT_COLOR) -> Tuple[str, int]:
    """Split ``text`` into its base text and count."""

    quantity = find_quantity(text, color)
    if quantity > QUANTITY_DEFAULT:
        end = _marker_prefix(color) + str(quantity)
        # The host sometimes appends a closing color tag after the marker.
        if text.endswith(end) or text.endswith(end + CLOSING_COLOR_TAG):
            return text[: text.rfind(end)], quantity
    return text, QUANTITY_DEFAULT


def append_quantity(text: str, count: int, color: str = DEFAULT_COUNT_COLOR) -> str:
    """Append the marker for ``count``; a count of 1 leaves ``text`` unchanged."""

    if count <= QUANTITY_DEFAULT:
        return text
    return f"{text}{_marker_prefix(color)}{count}"


def add_quantity(text: str, color: str = DEFAULT_COUNT_COLOR) -> str:
    """Bump the marker on ``text`` by one."""

    base, count = strip_quantity(text, color)
    return append_quantity(base, count + 1, color)
