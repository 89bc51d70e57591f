"""Duplicate-message tracking (core domain).

Two strategies are used because the two call sites see different things:

1. **Cache-based**: every rendered message is observed into a bounded LRU
   keyed by (author, normalized text). When the chat is re-rendered, earlier
   copies are hidden and the latest one shows the running count.

2. **Window-based**: merging a new line into a visible line requires looking
   at what is actually on screen, so the last few displayed lines are scanned
   instead of the cache.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging
from typing import Iterable, Optional, Tuple

from core.config import DEFAULT_CACHE_SIZE, DEFAULT_COUNT_COLOR, DuplicateSuffix
from core.models import ChatLine, CollapseDecision
from core.quantity import add_quantity, append_quantity, strip_quantity
from core.text import normalize_message, remove_style_tags

LOGGER = logging.getLogger(__name__)

# Index of the last visible line considered by the window scan. The scan
# breaks once the index exceeds this value, so nine lines are inspected.
VISIBLE_MESSAGES = 8

DuplicateKey = Tuple[str, str]


@dataclass
class DuplicateEntry:
    count: int
    message_id: int


def duplicate_key(author: Optional[str], text: str) -> DuplicateKey:
    return (author or "", normalize_message(text))


class DuplicateTracker:
    """Bounded LRU of recently rendered messages.

    Uses an :class:`OrderedDict`; both lookups and updates move a key to the
    most-recently-used end and the oldest entry is evicted when the store
    exceeds ``max_entries``.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_SIZE) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max = max_entries
        self._entries: OrderedDict[DuplicateKey, DuplicateEntry] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max

    def resize(self, max_entries: int) -> None:
        """Change the capacity, evicting the oldest entries if it shrank."""

        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max = max_entries
        self._evict()

    def observe(self, author: Optional[str], text: str, message_id: int) -> DuplicateEntry:
        """Record that a message was rendered."""

        key = duplicate_key(author, text)
        entry = self._entries.pop(key, None)
        if entry is None:
            entry = DuplicateEntry(count=0, message_id=message_id)
        entry.count += 1
        entry.message_id = message_id
        self._entries[key] = entry
        self._evict()
        return entry

    def get(self, author: Optional[str], text: str) -> Optional[DuplicateEntry]:
        key = duplicate_key(author, text)
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    def should_collapse(
        self,
        author: Optional[str],
        text: str,
        message_id: int,
        *,
        player_chat: bool = False,
        max_repeats: int = 0,
    ) -> CollapseDecision:
        """Decide whether the line for ``message_id`` should be hidden.

        A line is hidden when a later copy of the same message exists, or, for
        player chat, when the message has been repeated more than
        ``max_repeats`` times (0 disables that limit).
        """

        entry = self.get(author, text)
        if entry is None:
            return CollapseDecision(collapse=False, count=1)

        collapse = entry.message_id != message_id or (
            player_chat and max_repeats > 0 and entry.count > max_repeats
        )
        return CollapseDecision(collapse=collapse, count=entry.count)

    def clear(self) -> None:
        self._entries.clear()

    def _evict(self) -> None:
        while len(self._entries) > self._max:
            key, _ = self._entries.popitem(last=False)
            LOGGER.debug("Evicted duplicate entry for %s", key[0] or "<system>")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def format_duplicate_count(
    text: str,
    count: int,
    style: DuplicateSuffix = DuplicateSuffix.PARENTHESIZED,
    color: str = DEFAULT_COUNT_COLOR,
) -> str:
    """Render ``text`` with its repeat count; counts of 1 add nothing."""

    if count <= 1:
        return text
    if style is DuplicateSuffix.PARENTHESIZED:
        return f"{text} ({count})"
    if style is DuplicateSuffix.MARKER:
        return append_quantity(text, count, color)
    raise ValueError(f"Unsupported duplicate suffix: {style}")


def _is_same_line(old: ChatLine, new: ChatLine, color: str) -> bool:
    if old.message_id == new.message_id:
        return False
    if old.message_type is not new.message_type:
        return False
    if old.sender != new.sender or old.name != new.name:
        return False
    old_text, _ = strip_quantity(old.value, color)
    return remove_style_tags(old_text) == remove_style_tags(new.value)


def find_duplicate_line(
    lines: Iterable[Optional[ChatLine]],
    new_line: ChatLine,
    color: str = DEFAULT_COUNT_COLOR,
) -> Optional[ChatLine]:
    """Return the most recent visible line that ``new_line`` repeats."""

    candidates = sorted(
        (line for line in lines if line is not None),
        key=lambda line: line.message_id,
        reverse=True,
    )
    for index, line in enumerate(candidates):
        if index > VISIBLE_MESSAGES:
            break
        if _is_same_line(line, new_line, color):
            return line
    return None


def collapse_duplicate_line(line: ChatLine, color: str = DEFAULT_COUNT_COLOR) -> ChatLine:
    """Increment the visible quantity on ``line`` in place."""

    line.value = add_quantity(line.value, color)
    return line
