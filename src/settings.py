"""Static configuration for chatfilter.

All user-editable settings (rule lists, filter mode, collapsing, logging)
live in a single JSON file for quick edits without touching Python.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

from dotenv import load_dotenv

from core.config import (
    CONFIG_GROUP,
    DEFAULT_CACHE_SIZE,
    DEFAULT_CENSOR_MESSAGE,
    DEFAULT_COUNT_COLOR,
    DuplicateSuffix,
    FilterConfig,
    FilterMode,
)

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits next to the project by default; CHATFILTER_CONFIG points
# somewhere else (e.g. a host-managed settings directory).
CONFIG_PATH = os.getenv("CHATFILTER_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def load_json_config(path: Optional[str] = None) -> dict:
    """Load config.json with a flat, user-friendly schema."""

    path = path or CONFIG_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _parse_enum(enum_cls, raw: Any, default):
    if raw is None:
        return default
    try:
        return enum_cls(str(raw).lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Unsupported value {raw!r}; expected one of: {allowed}") from None


def build_filter_config(raw: dict) -> FilterConfig:
    """Build a FilterConfig from the ``chatfilter`` section of the config."""

    section = raw.get(CONFIG_GROUP, {}) or {}

    cache_size = int(section.get("duplicate_cache_size", DEFAULT_CACHE_SIZE))
    if cache_size < 1:
        raise ValueError("duplicate_cache_size must be at least 1")

    return FilterConfig(
        filter_type=_parse_enum(FilterMode, section.get("filter_type"), FilterMode.MASK_CHARACTERS),
        filtered_words=section.get("filtered_words", "") or "",
        filtered_regex=section.get("filtered_regex", "") or "",
        filtered_names=section.get("filtered_names", "") or "",
        filter_friends=bool(section.get("filter_friends", False)),
        filter_clan=bool(section.get("filter_clan", False)),
        filter_login=bool(section.get("filter_login", False)),
        collapse_player_chat=bool(section.get("collapse_player_chat", False)),
        collapse_game_chat=bool(section.get("collapse_game_chat", False)),
        collapse_chat_messages=bool(section.get("collapse_chat_messages", False)),
        # Repeat limit for public/mod chat; 0 disables it.
        max_repeated_public_chats=int(section.get("max_repeated_public_chats", 0)),
        chat_message_count_color=str(
            section.get("chat_message_count_color", DEFAULT_COUNT_COLOR)
        ).lstrip("#").lower(),
        duplicate_suffix=_parse_enum(
            DuplicateSuffix, section.get("duplicate_suffix"), DuplicateSuffix.PARENTHESIZED
        ),
        censor_message=section.get("censor_message") or DEFAULT_CENSOR_MESSAGE,
        duplicate_cache_size=cache_size,
    )


def rules_dir(raw: dict) -> Optional[str]:
    """Return the optional rule-file directory, resolved against the project root."""

    path = (raw.get(CONFIG_GROUP, {}) or {}).get("rules_dir")
    if not path:
        return None
    if not os.path.isabs(path):
        path = os.path.join(PROJECT_ROOT, path)
    return path


def logging_config(raw: dict) -> dict:
    return raw.get("logging", {}) or {}
