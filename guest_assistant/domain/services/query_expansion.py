"""Query expansion with domain synonyms to improve recall.

The expanded string is only used for retrieval. The original question is
always kept verbatim at the front; matched terms are appended in table order.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ExpansionRule:
    name: str
    pattern: re.Pattern[str]
    terms: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(name: str, pattern: str, terms: str) -> ExpansionRule:
    return ExpansionRule(name=name, pattern=re.compile(pattern, re.IGNORECASE), terms=terms)


# Appended terms must only re-trigger their own rule, so a second pass is stable.
DEFAULT_RULES: tuple[ExpansionRule, ...] = (
    _rule("saturday", r"\bsat(?:urday)?s?\b", "Saturday weekend"),
    _rule("sunday", r"\bsun(?:day)?s?\b", "Sunday weekend"),
    _rule("vehicle", r"\b(?:cars?|vehicles?|drive|driving|parking)\b", "parking lot"),
    _rule(
        "hours",
        r"\b(?:hours?|open|opens|opening|close|closes|closed|closing|times?)\b",
        "hours open opening times",
    ),
)


def matching_rules(
    text: str, rules: Sequence[ExpansionRule] = DEFAULT_RULES
) -> list[ExpansionRule]:
    return [r for r in rules if r.matches(text)]


def expand(question: str, rules: Sequence[ExpansionRule] = DEFAULT_RULES) -> str:
    matched = matching_rules(question, rules)
    if not matched:
        return question
    return " ".join([question, *(r.terms for r in matched)])
