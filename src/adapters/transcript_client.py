"""In-memory chat panel used for transcript replay.

Implements ChatClientPort and ClanOraclePort without a real game client: the
lines list stands in for the chat buffers and refreshes are just counted.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from core.models import ChatLine, ChatMessage


class TranscriptChatClient:
    """Chat panel state for a replayed session."""

    def __init__(
        self,
        local_player: Optional[str] = None,
        friends: Iterable[str] = (),
        clan_members: Iterable[str] = (),
    ) -> None:
        self._local_player = local_player
        self._friends = {name.lower() for name in friends}
        self._clan = {name.lower() for name in clan_members}
        self.lines: List[ChatLine] = []
        self.refresh_count = 0

    def add_message(self, message: ChatMessage) -> ChatLine:
        line = ChatLine(
            message_id=message.message_id,
            message_type=message.message_type,
            name=message.name,
            value=message.text,
            sender=message.sender,
        )
        self.lines.append(line)
        return line

    def local_player_name(self) -> Optional[str]:
        return self._local_player

    def is_friend(self, name: str) -> bool:
        return name.lower() in self._friends

    def is_clan_member(self, name: str) -> bool:
        return name.lower() in self._clan

    def chat_lines(self) -> Iterable[ChatLine]:
        return list(self.lines)

    def remove_line(self, message_id: int) -> None:
        self.lines = [line for line in self.lines if line.message_id != message_id]

    def refresh_chat(self) -> None:
        self.refresh_count += 1
