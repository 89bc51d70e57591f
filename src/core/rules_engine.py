"""Rule compilation (core domain)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import re
from typing import Iterable, List, Optional, Tuple

from core.text import split_csv, split_lines

LOGGER = logging.getLogger(__name__)


class RuleKind(Enum):
    LITERAL_WORD = "word"
    REGEX = "regex"
    NAME_PATTERN = "name"


@dataclass(frozen=True)
class Rule:
    """Compiled rule used by the censor."""

    kind: RuleKind
    source: str
    pattern: re.Pattern


@dataclass(frozen=True)
class RuleSet:
    """Immutable snapshot of all compiled rules.

    The processor holds one RuleSet and swaps it wholesale on reconfiguration,
    so a match pass never observes a half-built rule list.
    """

    words: Tuple[Rule, ...] = field(default_factory=tuple)
    regexes: Tuple[Rule, ...] = field(default_factory=tuple)
    names: Tuple[Rule, ...] = field(default_factory=tuple)

    @property
    def content_rules(self) -> Tuple[Rule, ...]:
        return self.words + self.regexes

    def __len__(self) -> int:
        return len(self.words) + len(self.regexes) + len(self.names)


EMPTY_RULES = RuleSet()


def compile_pattern(source: str) -> Optional[re.Pattern]:
    """Compile a user pattern case-insensitively, or return None if invalid."""

    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as exc:
        LOGGER.debug("Skipping invalid pattern %r: %s", source, exc)
        return None


def _compile_all(sources: Iterable[str], kind: RuleKind) -> Tuple[Rule, ...]:
    compiled: List[Rule] = []
    for source in sources:
        pattern = compile_pattern(source)
        if pattern is None:
            continue
        compiled.append(Rule(kind=kind, source=source, pattern=pattern))
    return tuple(compiled)


def build_rules(
    filtered_words: Optional[str],
    filtered_regex: Optional[str],
    filtered_names: Optional[str],
) -> RuleSet:
    """Compile the three rule blobs into a RuleSet.

    - words: comma separated, matched literally
    - regex: one pattern per line
    - names: one pattern per line, matched against the author's name

    Invalid regex or name entries are dropped; the rest still compile.
    """

    words = tuple(
        Rule(
            kind=RuleKind.LITERAL_WORD,
            source=word,
            pattern=re.compile(re.escape(word), re.IGNORECASE),
        )
        for word in split_csv(filtered_words)
    )
    return RuleSet(
        words=words,
        regexes=_compile_all(split_lines(filtered_regex), RuleKind.REGEX),
        names=_compile_all(split_lines(filtered_names), RuleKind.NAME_PATTERN),
    )
