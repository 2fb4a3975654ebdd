"""Canonical refusal phrase and repair of near-miss spellings.

Why: Downstream source hiding keys off the exact refusal phrase, so small
model slips ("I dont know", "I do not know", curly apostrophes, typos)
are rewritten to the canonical form first.
"""

from __future__ import annotations

import re
from difflib import SequenceMatcher

REFUSAL_PHRASE = "I don't know"

_EXACT_VARIANTS = re.compile(
    r"^[\"'“‘]?\s*i\s+(?:do\s*n\s*[’'‘`´]?\s*t|do\s+not)\s+know\b",
    re.IGNORECASE,
)
_LEAD_WORDS = re.compile(r"^[\"'“‘]?\s*(\S+)\s+(\S+)\s+([A-Za-z]+)")

_WORD_SIMILARITY = 0.75

# real contractions close to "don't" that must never be rewritten
_OTHER_CONTRACTIONS = frozenset(
    {"won't", "wont", "can't", "cant", "didn't", "didnt", "doesn't", "doesnt"}
)


def _similar(a: str, b: str) -> bool:
    return SequenceMatcher(None, a.lower(), b.lower()).ratio() >= _WORD_SIMILARITY


def _misspelled_dont(word: str) -> bool:
    w = re.sub(r"[’‘`´]", "'", word.lower())
    return w.startswith("d") and w not in _OTHER_CONTRACTIONS and _similar(w, "don't")


def normalize_refusal(text: str) -> str:
    """Rewrite a leading near-miss of the refusal phrase to the canonical phrase."""
    stripped = (text or "").strip()
    if stripped.startswith(REFUSAL_PHRASE):
        return stripped

    m = _EXACT_VARIANTS.match(stripped)
    if m:
        return REFUSAL_PHRASE + stripped[m.end() :]

    m = _LEAD_WORDS.match(stripped)
    if m:
        first, second, third = m.groups()
        if first.lower() == "i" and _misspelled_dont(second) and _similar(third, "know"):
            return REFUSAL_PHRASE + stripped[m.end() :]
    return stripped


def is_refusal(text: str) -> bool:
    return (text or "").strip().startswith(REFUSAL_PHRASE)
