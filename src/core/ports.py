"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the host client, membership lookups
and configuration storage so that the core can be reused with different
hosts.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from core.config import FilterConfig
from core.models import ChatLine


class ChatClientPort(Protocol):
    """Host chat client operations required by the processor."""

    def local_player_name(self) -> Optional[str]:
        ...

    def is_friend(self, name: str) -> bool:
        ...

    def chat_lines(self) -> Iterable[ChatLine]:
        ...

    def remove_line(self, message_id: int) -> None:
        ...

    def refresh_chat(self) -> None:
        ...


class ClanOraclePort(Protocol):
    """Clan membership lookup."""

    def is_clan_member(self, name: str) -> bool:
        ...


class ConfigSourcePort(Protocol):
    """Reads the current filter configuration from wherever it is stored."""

    def load(self) -> FilterConfig:
        ...
