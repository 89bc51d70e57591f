"""Transcript-to-core event mapping adapter.

A transcript is a JSON Lines file, one host event per line:

    {"event": "chat_message", "id": 1, "type": "publicchat", "name": "Bob", "text": "hi"}
    {"event": "overhead_text", "name": "Bob", "text": "hi"}
    {"event": "config_changed", "group": "chatfilter"}

This keeps the file format out of the core pipeline.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Iterator, Tuple

from core.models import ChatMessage, ConfigChanged, MessageType, OverheadTextChanged
from core.processor import EventKind

LOGGER = logging.getLogger(__name__)


class TranscriptError(ValueError):
    """Raised when a transcript line cannot be mapped to an event."""


def build_event(record: dict) -> Tuple[EventKind, Any]:
    """Map one decoded transcript record to an (event kind, payload) pair."""

    if not isinstance(record, dict):
        raise TranscriptError("transcript records must be JSON objects")

    kind = record.get("event")
    if kind == "chat_message":
        try:
            message_id = int(record["id"])
        except (KeyError, TypeError, ValueError):
            raise TranscriptError("chat_message requires an integer 'id'") from None
        return EventKind.CHAT_MESSAGE, ChatMessage(
            message_id=message_id,
            message_type=MessageType.parse(record.get("type")),
            name=record.get("name"),
            text=record.get("text", "") or "",
            sender=record.get("sender"),
        )
    if kind == "overhead_text":
        return EventKind.OVERHEAD_TEXT_CHANGED, OverheadTextChanged(
            actor_name=record.get("name"),
            overhead_text=record.get("text", "") or "",
            is_player=bool(record.get("player", True)),
        )
    if kind == "config_changed":
        return EventKind.CONFIG_CHANGED, ConfigChanged(
            group=record.get("group", ""),
            key=record.get("key"),
        )
    raise TranscriptError(f"Unsupported transcript event: {kind!r}")


def read_events(lines: Iterable[str]) -> Iterator[Tuple[EventKind, Any]]:
    """Yield events from transcript lines, skipping blanks and bad records."""

    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            yield build_event(json.loads(line))
        except (json.JSONDecodeError, TranscriptError) as exc:
            LOGGER.warning("Skipping transcript line %s: %s", number, exc)
