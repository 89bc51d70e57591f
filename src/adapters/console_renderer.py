"""Console rendering of chat lines.

Chat values carry the host's inline tags (``<col=ff0000>``, ``</col>``,
``<br>``...). Color tags become rich styles; everything else is dropped.
"""

from __future__ import annotations

import re
from typing import Optional

from rich.text import Text

from core.models import ChatLine

_TAG_RE = re.compile(r"<([^>]*)>")
_COLOR_RE = re.compile(r"col=([0-9a-fA-F]{6})")


def render_markup(value: str) -> Text:
    """Convert tagged chat text into a styled rich Text."""

    text = Text()
    style: Optional[str] = None
    position = 0
    for match in _TAG_RE.finditer(value):
        if match.start() > position:
            text.append(value[position:match.start()], style=style)
        tag = match.group(1)
        color = _COLOR_RE.fullmatch(tag)
        if color:
            style = f"#{color.group(1).lower()}"
        elif tag == "/col":
            style = None
        position = match.end()
    if position < len(value):
        text.append(value[position:], style=style)
    return text


def render_line(line: ChatLine, value: Optional[str] = None) -> Text:
    """Render a chat line as ``[type] Name: message``."""

    prefix = Text(f"[{line.message_type.value}] ", style="dim")
    if line.name:
        prefix.append(f"{line.name}: ", style="bold")
    return Text.assemble(prefix, render_markup(line.value if value is None else value))
