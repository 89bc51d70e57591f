from __future__ import annotations

import pytest

from core.censor import censor_message, matches_name
from core.config import DEFAULT_CENSOR_MESSAGE, FilterMode
from core.models import FilterVerdict, VerdictAction
from core.rules_engine import build_rules


def test_mask_replaces_only_the_matched_word() -> None:
    rules = build_rules("spam", "", "")

    verdict = censor_message("Bob", "this is spam", rules, FilterMode.MASK_CHARACTERS)

    assert verdict == FilterVerdict.rewrite("this is ****")


@pytest.mark.parametrize(
    "message, expected",
    [
        ("SPAM and Spam", "**** and ****"),
        ("buy GOLDEN items", "buy ****EN items"),
        ("goldgold", "********"),
    ],
)
def test_mask_is_case_insensitive_and_keeps_span_length(message: str, expected: str) -> None:
    rules = build_rules("spam, gold", "", "")

    verdict = censor_message("Bob", message, rules, FilterMode.MASK_CHARACTERS)

    assert verdict.action is VerdictAction.REWRITE
    assert verdict.text == expected
    assert len(verdict.text) == len(message)


def test_mask_accumulates_across_rules() -> None:
    rules = build_rules("foo", "bar\\d", "")

    verdict = censor_message("Bob", "foo bar1 baz", rules, FilterMode.MASK_CHARACTERS)

    assert verdict.text == "*** **** baz"


def test_later_rules_see_already_masked_text() -> None:
    rules = build_rules("ab", "\\*\\*c", "")

    verdict = censor_message("Bob", "abc", rules, FilterMode.MASK_CHARACTERS)

    assert verdict.text == "***"


def test_replace_mode_returns_censor_message_on_first_hit() -> None:
    rules = build_rules("spam", "", "")

    verdict = censor_message("Bob", "this is spam", rules, FilterMode.REPLACE_WITH_MESSAGE)

    assert verdict == FilterVerdict.rewrite(DEFAULT_CENSOR_MESSAGE)


def test_replace_mode_uses_configured_censor_text() -> None:
    rules = build_rules("spam", "", "")

    verdict = censor_message("Bob", "spam", rules, FilterMode.REPLACE_WITH_MESSAGE, "[removed]")

    assert verdict.text == "[removed]"


def test_suppress_mode_blocks() -> None:
    rules = build_rules("", "sp[a4]m", "")

    verdict = censor_message("Bob", "sp4m!", rules, FilterMode.SUPPRESS)

    assert verdict.blocked
    assert verdict.text is None


def test_no_match_returns_original_message_untouched() -> None:
    rules = build_rules("spam", "", "")
    message = "hi\u00a0there ☺"

    verdict = censor_message("Bob", message, rules, FilterMode.MASK_CHARACTERS)

    assert verdict == FilterVerdict.passed(message)


def test_matching_runs_on_normalized_text() -> None:
    rules = build_rules("hi there, spam", "", "")

    nbsp = censor_message("Bob", "hi\u00a0there", rules, FilterMode.MASK_CHARACTERS)
    unprintable = censor_message("Bob", "sp☺am", rules, FilterMode.MASK_CHARACTERS)

    assert nbsp.text == "********"
    assert unprintable.text == "****"


@pytest.mark.parametrize(
    "mode, expected",
    [
        (FilterMode.MASK_CHARACTERS, FilterVerdict.rewrite("*****")),
        (FilterMode.REPLACE_WITH_MESSAGE, FilterVerdict.rewrite(DEFAULT_CENSOR_MESSAGE)),
        (FilterMode.SUPPRESS, FilterVerdict.block()),
    ],
)
def test_name_match_applies_mode_to_whole_message(mode: FilterMode, expected: FilterVerdict) -> None:
    rules = build_rules("", "", "bot.*")

    assert censor_message("bot123", "hello", rules, mode) == expected


def test_name_match_short_circuits_content_rules() -> None:
    rules = build_rules("hello", "", "^bot")

    verdict = censor_message("Bot7", "hello world", rules, FilterMode.MASK_CHARACTERS)

    assert verdict.text == "*" * len("hello world")


def test_name_is_standardized_before_matching() -> None:
    rules = build_rules("", "", "^bad guy$")

    assert matches_name("<img=2>Bad\u00a0Guy ", rules)
    assert not matches_name("Good Guy", rules)
    assert not matches_name(None, rules)


def test_unknown_mode_is_rejected() -> None:
    rules = build_rules("spam", "", "")

    with pytest.raises(ValueError):
        censor_message("Bob", "spam", rules, "bogus")  # type: ignore[arg-type]
