from __future__ import annotations

from typing import Optional

import pytest

from core.config import DuplicateSuffix
from core.dedup import (
    DuplicateTracker,
    collapse_duplicate_line,
    duplicate_key,
    find_duplicate_line,
    format_duplicate_count,
)
from core.models import ChatLine, CollapseDecision, MessageType
from core.text import remove_tags


def _line(
    message_id: int,
    value: str,
    *,
    name: Optional[str] = None,
    message_type: MessageType = MessageType.GAMEMESSAGE,
    sender: Optional[str] = None,
) -> ChatLine:
    return ChatLine(
        message_id=message_id,
        message_type=message_type,
        name=name,
        value=value,
        sender=sender,
    )


def test_unknown_message_is_never_collapsed() -> None:
    tracker = DuplicateTracker()

    assert tracker.should_collapse("X", "hi", 1) == CollapseDecision(collapse=False, count=1)


def test_repeats_collapse_earlier_lines_and_count_on_latest() -> None:
    tracker = DuplicateTracker()
    for message_id in (1, 2, 3):
        tracker.observe("X", "hi", message_id)

    assert tracker.should_collapse("X", "hi", 2) == CollapseDecision(collapse=True, count=3)
    latest = tracker.should_collapse("X", "hi", 3)
    assert latest == CollapseDecision(collapse=False, count=3)

    rendered = format_duplicate_count("hi", latest.count, DuplicateSuffix.MARKER)
    assert rendered == "hi<col=ff0000> x 3"
    assert remove_tags(rendered) == "hi x 3"


def test_authors_are_tracked_separately() -> None:
    tracker = DuplicateTracker()
    tracker.observe("X", "hi", 1)
    tracker.observe("Y", "hi", 2)

    assert tracker.should_collapse("X", "hi", 1).collapse is False
    assert tracker.should_collapse("Y", "hi", 2).count == 1


def test_key_uses_normalized_text() -> None:
    tracker = DuplicateTracker()
    tracker.observe("X", "hi\u00a0there", 1)

    assert duplicate_key("X", "hi there") in tracker
    assert tracker.get("X", "hi there").count == 1


def test_max_repeats_only_applies_to_player_chat() -> None:
    tracker = DuplicateTracker()
    for message_id in range(1, 5):
        tracker.observe("X", "spam", message_id)

    assert tracker.should_collapse("X", "spam", 4, player_chat=True, max_repeats=3).collapse
    assert not tracker.should_collapse("X", "spam", 4, player_chat=True, max_repeats=4).collapse
    assert not tracker.should_collapse("X", "spam", 4, player_chat=False, max_repeats=3).collapse
    assert not tracker.should_collapse("X", "spam", 4, player_chat=True, max_repeats=0).collapse


def test_capacity_is_never_exceeded() -> None:
    tracker = DuplicateTracker(max_entries=100)
    for message_id in range(250):
        tracker.observe("X", f"message {message_id}", message_id)
        assert len(tracker) <= 100

    assert len(tracker) == 100
    assert duplicate_key("X", "message 149") not in tracker
    assert duplicate_key("X", "message 150") in tracker


def test_eviction_removes_least_recently_touched() -> None:
    tracker = DuplicateTracker(max_entries=3)
    tracker.observe("X", "a", 1)
    tracker.observe("X", "b", 2)
    tracker.observe("X", "c", 3)
    # Lookups count as a touch.
    tracker.should_collapse("X", "a", 1)

    tracker.observe("X", "d", 4)

    assert len(tracker) == 3
    assert duplicate_key("X", "b") not in tracker
    for text in ("a", "c", "d"):
        assert duplicate_key("X", text) in tracker


def test_repeat_moves_entry_to_most_recent() -> None:
    tracker = DuplicateTracker(max_entries=2)
    tracker.observe("X", "a", 1)
    tracker.observe("X", "b", 2)
    tracker.observe("X", "a", 3)

    tracker.observe("X", "c", 4)

    assert duplicate_key("X", "a") in tracker
    assert duplicate_key("X", "b") not in tracker
    assert tracker.get("X", "a").count == 2


def test_resize_and_clear() -> None:
    tracker = DuplicateTracker(max_entries=5)
    for message_id in range(5):
        tracker.observe(None, str(message_id), message_id)

    tracker.resize(2)
    assert len(tracker) == 2
    assert duplicate_key(None, "4") in tracker

    tracker.clear()
    assert len(tracker) == 0


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DuplicateTracker(max_entries=0)


def test_parenthesized_suffix() -> None:
    assert format_duplicate_count("hi", 1) == "hi"
    assert format_duplicate_count("hi", 4) == "hi (4)"


def test_window_scan_admits_nine_lines() -> None:
    new_line = _line(100, "Nothing interesting happens.")

    # Descending by id, line 2 is at index 8 and line 1 at index 9.
    within = [_line(i, "other") for i in range(1, 11)]
    within[1].value = "Nothing interesting happens."
    outside = [_line(i, "other") for i in range(1, 11)]
    outside[0].value = "Nothing interesting happens."

    assert find_duplicate_line(within, new_line) is within[1]
    assert find_duplicate_line(outside, new_line) is None


def test_window_match_ignores_marker_and_style_tags() -> None:
    old = _line(1, "<col=0000ff>hello</col><col=ff0000> x 2")
    lines = [None, old]

    assert find_duplicate_line(lines, _line(2, "hello")) is old


def test_window_requires_same_type_sender_and_name() -> None:
    old = _line(1, "hello", name="Bob", message_type=MessageType.PUBLICCHAT, sender="clan")

    assert find_duplicate_line([old], _line(1, "hello", name="Bob", message_type=MessageType.PUBLICCHAT, sender="clan")) is None
    assert find_duplicate_line([old], _line(2, "hello", name="Bob", message_type=MessageType.MODCHAT, sender="clan")) is None
    assert find_duplicate_line([old], _line(2, "hello", name="Bob", message_type=MessageType.PUBLICCHAT, sender=None)) is None
    assert find_duplicate_line([old], _line(2, "hello", name="Al", message_type=MessageType.PUBLICCHAT, sender="clan")) is None
    assert find_duplicate_line([old], _line(2, "hello", name="Bob", message_type=MessageType.PUBLICCHAT, sender="clan")) is old


def test_collapse_duplicate_line_bumps_quantity() -> None:
    line = _line(1, "hello")

    collapse_duplicate_line(line)
    collapse_duplicate_line(line)

    assert line.value == "hello<col=ff0000> x 3"
