from __future__ import annotations

import pytest

from core.name_gate import is_eligible


def test_system_messages_are_always_eligible() -> None:
    assert is_eligible(None, "Me", True, True, False, False)


@pytest.mark.parametrize("filter_friends", [True, False])
@pytest.mark.parametrize("filter_clan", [True, False])
def test_own_messages_are_never_eligible(filter_friends: bool, filter_clan: bool) -> None:
    assert not is_eligible("Me", "Me", False, False, filter_friends, filter_clan)


def test_strangers_are_eligible() -> None:
    assert is_eligible("Bob", "Me", False, False, False, False)


def test_friends_are_exempt_unless_opted_in() -> None:
    assert not is_eligible("Bob", "Me", True, False, False, False)
    assert is_eligible("Bob", "Me", True, False, True, False)


def test_clan_members_are_exempt_unless_opted_in() -> None:
    assert not is_eligible("Bob", "Me", False, True, False, False)
    assert is_eligible("Bob", "Me", False, True, False, True)


def test_oracles_are_not_consulted_when_flags_decide() -> None:
    def fail() -> bool:
        raise AssertionError("oracle should not be called")

    assert is_eligible("Bob", "Me", fail, fail, True, True)


def test_callable_oracles_are_evaluated() -> None:
    assert not is_eligible("Bob", "Me", lambda: True, lambda: False, False, False)
    assert is_eligible("Bob", "Me", lambda: False, lambda: False, False, False)
