"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CONFIG_GROUP = "chatfilter"

DEFAULT_CENSOR_MESSAGE = "Hey, everyone, I just tried to say something very silly!"
DEFAULT_COUNT_COLOR = "ff0000"
DEFAULT_CACHE_SIZE = 100


class FilterMode(Enum):
    """What a rule match does to the message."""

    MASK_CHARACTERS = "censor_words"
    REPLACE_WITH_MESSAGE = "censor_message"
    SUPPRESS = "remove_message"


class DuplicateSuffix(Enum):
    """How the repeat count is rendered on a kept chat line."""

    PARENTHESIZED = "parenthesized"
    MARKER = "marker"


@dataclass(frozen=True)
class FilterConfig:
    """Filtering and collapsing settings for the core processor."""

    filter_type: FilterMode = FilterMode.MASK_CHARACTERS
    filtered_words: str = ""
    filtered_regex: str = ""
    filtered_names: str = ""
    filter_friends: bool = False
    filter_clan: bool = False
    filter_login: bool = False
    collapse_player_chat: bool = False
    collapse_game_chat: bool = False
    collapse_chat_messages: bool = False
    max_repeated_public_chats: int = 0
    chat_message_count_color: str = DEFAULT_COUNT_COLOR
    duplicate_suffix: DuplicateSuffix = DuplicateSuffix.PARENTHESIZED
    censor_message: str = DEFAULT_CENSOR_MESSAGE
    duplicate_cache_size: int = DEFAULT_CACHE_SIZE
