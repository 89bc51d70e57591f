"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any host-client specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MessageType(Enum):
    """Chat message categories reported by the host client."""

    PUBLICCHAT = "publicchat"
    MODCHAT = "modchat"
    AUTOTYPER = "autotyper"
    PRIVATECHAT = "privatechat"
    MODPRIVATECHAT = "modprivatechat"
    FRIENDSCHAT = "friendschat"
    LOGINLOGOUTNOTIFICATION = "loginlogoutnotification"
    ENGINE = "engine"
    GAMEMESSAGE = "gamemessage"
    ITEM_EXAMINE = "item_examine"
    NPC_EXAMINE = "npc_examine"
    OBJECT_EXAMINE = "object_examine"
    SPAM = "spam"
    BROADCAST = "broadcast"
    TRADE = "trade"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "MessageType":
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw.lower())
        except ValueError:
            return cls.UNKNOWN


# Player-authored chat that is run through the name gate and censor.
FILTERABLE_TYPES = frozenset(
    {
        MessageType.PUBLICCHAT,
        MessageType.MODCHAT,
        MessageType.AUTOTYPER,
        MessageType.PRIVATECHAT,
        MessageType.MODPRIVATECHAT,
        MessageType.FRIENDSCHAT,
    }
)

COLLAPSIBLE_TYPES = frozenset(
    {
        MessageType.ENGINE,
        MessageType.GAMEMESSAGE,
        MessageType.ITEM_EXAMINE,
        MessageType.NPC_EXAMINE,
        MessageType.OBJECT_EXAMINE,
        MessageType.SPAM,
        MessageType.PUBLICCHAT,
        MessageType.MODCHAT,
    }
)

PLAYER_CHAT_TYPES = frozenset({MessageType.PUBLICCHAT, MessageType.MODCHAT})


@dataclass(frozen=True)
class ChatMessage:
    """Minimal message record used by the core processing pipeline."""

    message_id: int
    message_type: MessageType
    name: Optional[str]
    text: str
    sender: Optional[str] = None


@dataclass
class ChatLine:
    """A line currently shown in the chat panel.

    Unlike ChatMessage this is mutable: merging a duplicate rewrites ``value``
    in place, which is what the host renders on the next refresh.
    """

    message_id: int
    message_type: MessageType
    name: Optional[str]
    value: str
    sender: Optional[str] = None


class VerdictAction(Enum):
    PASS = "pass"
    REWRITE = "rewrite"
    BLOCK = "block"


@dataclass(frozen=True)
class FilterVerdict:
    """Outcome of censoring a single message."""

    action: VerdictAction
    text: Optional[str] = None

    @classmethod
    def passed(cls, text: str) -> "FilterVerdict":
        return cls(VerdictAction.PASS, text)

    @classmethod
    def rewrite(cls, text: str) -> "FilterVerdict":
        return cls(VerdictAction.REWRITE, text)

    @classmethod
    def block(cls) -> "FilterVerdict":
        return cls(VerdictAction.BLOCK)

    @property
    def blocked(self) -> bool:
        return self.action is VerdictAction.BLOCK


@dataclass(frozen=True)
class CollapseDecision:
    """Whether a rendered line should be hidden behind a later duplicate."""

    collapse: bool
    count: int


@dataclass(frozen=True)
class LineDecision:
    """Result of the chat-line filter hook: hide the line or render ``text``."""

    blocked: bool
    text: str


@dataclass
class OverheadTextChanged:
    """Floating text above an actor; ``overhead_text`` is rewritten in place."""

    actor_name: Optional[str]
    overhead_text: str
    is_player: bool = True


@dataclass(frozen=True)
class ConfigChanged:
    """Notification that a configuration group was edited."""

    group: str
    key: Optional[str] = None
