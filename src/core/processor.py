"""Core chat filtering pipeline.

This module is host-agnostic. It only relies on ports for the chat client,
clan lookups and configuration, enabling other hosts or a transcript replay
without changes here.

Every host callback goes through ``dispatch`` and is handled synchronously:
1) Name gate (self, friends, clan)
2) Censor against the current RuleSet
3) Duplicate collapse for collapsible message types
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Callable, Dict, Optional

from core.censor import censor_message
from core.config import CONFIG_GROUP, FilterConfig
from core.dedup import (
    DuplicateTracker,
    collapse_duplicate_line,
    find_duplicate_line,
    format_duplicate_count,
)
from core.models import (
    COLLAPSIBLE_TYPES,
    FILTERABLE_TYPES,
    PLAYER_CHAT_TYPES,
    ChatLine,
    ChatMessage,
    ConfigChanged,
    FilterVerdict,
    LineDecision,
    MessageType,
    OverheadTextChanged,
)
from core.name_gate import is_eligible
from core.ports import ChatClientPort, ClanOraclePort, ConfigSourcePort
from core.rules_engine import EMPTY_RULES, RuleSet, build_rules

LOGGER = logging.getLogger(__name__)

# Overhead text cannot be removed, only replaced; a single space hides it.
BLANK_OVERHEAD_TEXT = " "


class EventKind(Enum):
    CHAT_FILTER_CHECK = "chat_filter_check"
    CHAT_MESSAGE = "chat_message"
    OVERHEAD_TEXT_CHANGED = "overhead_text_changed"
    CONFIG_CHANGED = "config_changed"


@dataclass(frozen=True)
class FilterState:
    """Config and the rules compiled from it, swapped together."""

    config: FilterConfig
    rules: RuleSet


class ChatFilterProcessor:
    """Orchestrates name gating, censoring, and duplicate collapsing."""

    def __init__(
        self,
        client: ChatClientPort,
        clans: ClanOraclePort,
        config_source: ConfigSourcePort,
        tracker: Optional[DuplicateTracker] = None,
    ) -> None:
        self._client = client
        self._clans = clans
        self._config_source = config_source
        config = config_source.load()
        self._state = FilterState(config=config, rules=EMPTY_RULES)
        self._tracker = tracker or DuplicateTracker(config.duplicate_cache_size)
        self._handlers: Dict[EventKind, Callable[[Any], Any]] = {
            EventKind.CHAT_FILTER_CHECK: self.on_chat_filter_check,
            EventKind.CHAT_MESSAGE: self.on_chat_message,
            EventKind.OVERHEAD_TEXT_CHANGED: self.on_overhead_text_changed,
            EventKind.CONFIG_CHANGED: self.on_config_changed,
        }

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def config(self) -> FilterConfig:
        return self._state.config

    @property
    def rules(self) -> RuleSet:
        return self._state.rules

    @property
    def tracker(self) -> DuplicateTracker:
        return self._tracker

    def dispatch(self, kind: EventKind, event: Any) -> Any:
        """Route a host event to its handler and return the handler's result."""

        handler = self._handlers.get(kind)
        if handler is None:
            raise ValueError(f"Unsupported event kind: {kind}")
        return handler(event)

    def start_up(self) -> None:
        self._apply_config(self._state.config)
        self._client.refresh_chat()

    def shut_down(self) -> None:
        self._state = FilterState(config=self._state.config, rules=EMPTY_RULES)
        self._tracker.clear()
        self._client.refresh_chat()

    def reload(self) -> bool:
        """Re-read config from the source and recompile the rules.

        A config that cannot be read or parsed is logged and the current
        config and rules stay in place. Returns whether the reload applied.
        """

        try:
            config = self._config_source.load()
        except (OSError, ValueError):
            LOGGER.exception("Config reload failed; keeping previous rules")
            return False
        self._apply_config(config)
        return True

    def _apply_config(self, config: FilterConfig) -> None:
        rules = build_rules(config.filtered_words, config.filtered_regex, config.filtered_names)
        self._state = FilterState(config=config, rules=rules)
        if self._tracker.max_entries != config.duplicate_cache_size:
            self._tracker.resize(config.duplicate_cache_size)
        LOGGER.info(
            "Compiled %s word, %s regex and %s name rules",
            len(rules.words),
            len(rules.regexes),
            len(rules.names),
        )

    def should_filter_player(self, name: Optional[str]) -> bool:
        config = self._state.config
        return is_eligible(
            name,
            self._client.local_player_name(),
            lambda: self._client.is_friend(name),
            lambda: self._clans.is_clan_member(name),
            config.filter_friends,
            config.filter_clan,
        )

    def censor(self, name: Optional[str], message: str) -> FilterVerdict:
        state = self._state
        return censor_message(
            name,
            message,
            state.rules,
            state.config.filter_type,
            state.config.censor_message,
        )

    def _collapse_enabled(self, message_type: MessageType) -> bool:
        if message_type in PLAYER_CHAT_TYPES:
            return self._state.config.collapse_player_chat
        return message_type in COLLAPSIBLE_TYPES and self._state.config.collapse_game_chat

    def on_chat_filter_check(self, message: ChatMessage) -> LineDecision:
        """Decide how a chat line is rendered: hidden, rewritten, or counted."""

        config = self._state.config
        text = message.text
        blocked = False

        if message.message_type in FILTERABLE_TYPES:
            if self.should_filter_player(message.name):
                verdict = self.censor(message.name, text)
                blocked = verdict.blocked
                if not blocked:
                    text = verdict.text
        elif message.message_type is MessageType.LOGINLOGOUTNOTIFICATION:
            blocked = config.filter_login

        count = 1
        if not blocked and self._collapse_enabled(message.message_type):
            decision = self._tracker.should_collapse(
                message.name,
                text,
                message.message_id,
                player_chat=message.message_type in PLAYER_CHAT_TYPES,
                max_repeats=config.max_repeated_public_chats,
            )
            blocked = decision.collapse
            count = decision.count

        if blocked:
            LOGGER.debug("Hiding message %s from %s", message.message_id, message.name)
            return LineDecision(blocked=True, text=text)

        rendered = format_duplicate_count(
            text,
            count,
            config.duplicate_suffix,
            config.chat_message_count_color,
        )
        return LineDecision(blocked=False, text=rendered)

    def on_chat_message(self, message: ChatMessage) -> None:
        """Record a message that was added to the chat panel."""

        if message.message_type in COLLAPSIBLE_TYPES:
            self._tracker.observe(message.name, message.text, message.message_id)

        if self._state.config.collapse_chat_messages:
            self._collapse_into_visible_line(message)

    def _collapse_into_visible_line(self, message: ChatMessage) -> None:
        new_line = ChatLine(
            message_id=message.message_id,
            message_type=message.message_type,
            name=message.name,
            value=message.text,
            sender=message.sender,
        )
        color = self._state.config.chat_message_count_color
        old_line = find_duplicate_line(self._client.chat_lines(), new_line, color)
        if old_line is None:
            return
        collapse_duplicate_line(old_line, color)
        self._client.remove_line(message.message_id)
        self._client.refresh_chat()

    def on_overhead_text_changed(self, event: OverheadTextChanged) -> None:
        """Censor the text floating above a player."""

        if not event.is_player or not self.should_filter_player(event.actor_name):
            return

        verdict = self.censor(event.actor_name, event.overhead_text)
        event.overhead_text = BLANK_OVERHEAD_TEXT if verdict.blocked else verdict.text

    def on_config_changed(self, event: ConfigChanged) -> None:
        if event.group != CONFIG_GROUP:
            return

        if not self.reload():
            return
        # Refresh so already rendered lines reflect the new rules.
        self._client.refresh_chat()
