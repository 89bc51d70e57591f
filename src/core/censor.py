"""Message censoring (core domain)."""

from __future__ import annotations

import re
from typing import Optional

from core.config import DEFAULT_CENSOR_MESSAGE, FilterMode
from core.models import FilterVerdict
from core.rules_engine import RuleSet
from core.text import normalize_message, standardize_name

MASK_CHAR = "*"


def _mask(match: re.Match) -> str:
    return MASK_CHAR * len(match.group(0))


def matches_name(author: Optional[str], rules: RuleSet) -> bool:
    """Return True if the standardized author name hits any name rule."""

    if not rules.names:
        return False
    name = standardize_name(author)
    return any(rule.pattern.search(name) for rule in rules.names)


def _whole_message_verdict(text: str, mode: FilterMode, censor_text: str) -> FilterVerdict:
    if mode is FilterMode.MASK_CHARACTERS:
        return FilterVerdict.rewrite(MASK_CHAR * len(text))
    if mode is FilterMode.REPLACE_WITH_MESSAGE:
        return FilterVerdict.rewrite(censor_text)
    if mode is FilterMode.SUPPRESS:
        return FilterVerdict.block()
    raise ValueError(f"Unsupported filter mode: {mode}")


def censor_message(
    author: Optional[str],
    message: str,
    rules: RuleSet,
    mode: FilterMode,
    censor_text: str = DEFAULT_CENSOR_MESSAGE,
) -> FilterVerdict:
    """Apply name and content rules to ``message``.

    Matching runs on the normalized message. A name hit applies ``mode`` to the
    whole message and skips content rules. For content rules, the replace and
    suppress modes stop at the first hit anywhere, while masking replaces only
    the matched spans and keeps going with the remaining rules over the
    already-masked text. When nothing matches the original message is returned
    untouched, so normalization alone is never visible.
    """

    stripped = normalize_message(message)

    if matches_name(author, rules):
        return _whole_message_verdict(stripped, mode, censor_text)

    filtered = False
    for rule in rules.content_rules:
        if mode is FilterMode.MASK_CHARACTERS:
            stripped, hits = rule.pattern.subn(_mask, stripped)
            filtered = filtered or hits > 0
        elif mode is FilterMode.REPLACE_WITH_MESSAGE or mode is FilterMode.SUPPRESS:
            if rule.pattern.search(stripped):
                return _whole_message_verdict(stripped, mode, censor_text)
        else:
            raise ValueError(f"Unsupported filter mode: {mode}")

    if filtered:
        return FilterVerdict.rewrite(stripped)
    return FilterVerdict.passed(message)
