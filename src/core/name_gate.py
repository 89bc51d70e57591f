"""Author eligibility for filtering."""

from __future__ import annotations

from typing import Callable, Optional, Union

Oracle = Union[bool, Callable[[], bool]]


def _ask(oracle: Oracle) -> bool:
    return bool(oracle()) if callable(oracle) else bool(oracle)


def is_eligible(
    author: Optional[str],
    local_player: Optional[str],
    is_friend: Oracle,
    is_clan_member: Oracle,
    filter_friends: bool,
    filter_clan: bool,
) -> bool:
    """Return True when messages from ``author`` should go through the filter.

    System messages (no author) are always processed and the local player is
    never filtered. Friends and clan members are exempt unless the matching
    flag opts them back in. The oracles may be callables so lookups only happen
    when the flag leaves the answer open.
    """

    if author is None:
        return True
    if author == local_player:
        return False
    if not filter_friends and _ask(is_friend):
        return False
    if not filter_clan and _ask(is_clan_member):
        return False
    return True
