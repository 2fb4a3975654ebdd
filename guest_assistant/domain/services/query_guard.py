"""Query guard: flag questions too short or too deictic to retrieve against.

Rules are an ordered table of (name, predicate) pairs; the first rule that
fires decides the verdict. Over-flagging is preferred to answering on
insufficient signal.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .keyword_overlap import tokenize_meaningful

CLARIFICATION_MESSAGE = (
    'Could you clarify your question? For example: "What are your hours?" '
    'or "Is outside food allowed?"'
)

DEFAULT_MIN_CHARS = 8
DEFAULT_MIN_CONTENT_TERMS = 1

_DEICTIC = re.compile(r"\b(this one|this|that|it|here|there)\b")


@dataclass(frozen=True)
class GuardConfig:
    min_chars: int = DEFAULT_MIN_CHARS
    min_content_terms: int = DEFAULT_MIN_CONTENT_TERMS


@dataclass(frozen=True)
class GuardVerdict:
    vague: bool
    reason: str | None = None


@dataclass(frozen=True)
class GuardRule:
    name: str
    predicate: Callable[[str, GuardConfig], bool]


def _too_short(question: str, cfg: GuardConfig) -> bool:
    return len(question.strip()) < cfg.min_chars


def _deictic_reference(question: str, cfg: GuardConfig) -> bool:
    lower = question.strip().lower()
    if not _DEICTIC.search(lower):
        return False
    # deictic words are stopwords, so they never count as content
    return len(set(tokenize_meaningful(lower))) < cfg.min_content_terms


DEFAULT_RULES: tuple[GuardRule, ...] = (
    GuardRule("too_short", _too_short),
    GuardRule("deictic_reference", _deictic_reference),
)


def assess(
    question: str,
    config: GuardConfig | None = None,
    rules: Sequence[GuardRule] = DEFAULT_RULES,
) -> GuardVerdict:
    cfg = config or GuardConfig()
    for rule in rules:
        if rule.predicate(question or "", cfg):
            return GuardVerdict(vague=True, reason=rule.name)
    return GuardVerdict(vague=False)
