"""Text helpers shared by the censor and the duplicate tracker."""

from __future__ import annotations

import re
from typing import List, Optional

NBSP = "\u00a0"

_TAG_RE = re.compile(r"<[^>]*>")
# Style tags change how a line looks, not what it says; <img=N> is content.
_STYLE_TAG_RE = re.compile(r"<(?!img=)[^>]*>")


def _is_printable(ch: str) -> bool:
    code = ord(ch)
    return 32 <= code <= 126 or code == 128 or 160 <= code <= 255


def retain_printable(text: str) -> str:
    """Drop every character the chat font cannot draw."""

    return "".join(ch for ch in text if _is_printable(ch))


def normalize_message(text: str) -> str:
    """Normalize a message for matching: printable chars only, NBSP to space."""

    return retain_printable(text).replace(NBSP, " ")


def remove_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def remove_style_tags(text: str) -> str:
    return _STYLE_TAG_RE.sub("", text)


def standardize_name(name: Optional[str]) -> str:
    """Return a comparable form of a display name."""

    if not name:
        return ""
    return remove_tags(name).replace(NBSP, " ").strip().lower()


def split_csv(blob: Optional[str]) -> List[str]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""

    if not blob:
        return []
    return [part.strip() for part in blob.split(",") if part.strip()]


def split_lines(blob: Optional[str]) -> List[str]:
    """Split a newline-separated list, trimming entries and dropping empty ones."""

    if not blob:
        return []
    return [line.strip() for line in blob.split("\n") if line.strip()]


def color_tag(color: str) -> str:
    """Return the opening color tag for a hex color such as ``ff0000``."""

    return f"<col={color.lstrip('#').lower()}>"


CLOSING_COLOR_TAG = "</col>"
