"""Keyword tokenization and overlap between a question and a passage.

Used by the query guard (counting distinguishing terms) and by the optional
low-confidence check that refuses when the best passage shares no keyword
with the question.
"""

from __future__ import annotations

import re

STOPWORDS: frozenset[str] = frozenset(
    {
        "the",
        "and",
        "for",
        "with",
        "you",
        "your",
        "are",
        "but",
        "not",
        "from",
        "this",
        "that",
        "it",
        "here",
        "there",
        "what",
        "is",
        "about",
        "please",
        "tell",
        "me",
        "a",
        "an",
        "of",
        "to",
        "in",
        "on",
        "at",
        "by",
        "be",
        "we",
        "they",
        "i",
        "can",
        "does",
        "how",
        "one",
        "will",
        "have",
        "has",
        "our",
        "any",
        "may",
    }
)

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def tokenize_meaningful(text: str) -> list[str]:
    """Lower-case word tokens longer than two characters that are not stopwords."""
    cleaned = _NON_ALNUM.sub(" ", str(text).lower())
    return [w for w in cleaned.split() if len(w) > 2 and w not in STOPWORDS]


def keyword_overlap(question: str, passage: str) -> int:
    """Number of distinct meaningful words shared by question and passage."""
    return len(set(tokenize_meaningful(question)) & set(tokenize_meaningful(passage)))


def has_keyword_overlap(question: str, passage: str) -> bool:
    return keyword_overlap(question, passage) > 0
