"""Tests for the query guard (vagueness heuristics)."""

import pytest

from guest_assistant.domain.services.query_guard import (
    CLARIFICATION_MESSAGE,
    DEFAULT_RULES,
    GuardConfig,
    assess,
)


@pytest.mark.parametrize("question", ["hi", "", "   ", "hours?", "  hello  ", "x" * 7])
def test_short_questions_are_vague(question: str) -> None:
    verdict = assess(question)
    assert verdict.vague is True
    assert verdict.reason == "too_short"


def test_length_is_measured_after_trimming() -> None:
    assert assess("   abcdefgh   ").vague is False
    assert assess("   abcdefg    ").vague is True


@pytest.mark.parametrize(
    "question",
    [
        "What about this?",
        "Is it there?",
        "Can you tell me about that?",
        "What is this one about?",
    ],
)
def test_bare_deictic_questions_are_vague(question: str) -> None:
    verdict = assess(question)
    assert verdict.vague is True
    assert verdict.reason == "deictic_reference"


@pytest.mark.parametrize(
    "question",
    [
        "Is there parking?",
        "What about that exhibit?",
        "Is that open on Saturdays and Sundays?",
    ],
)
def test_deictic_word_with_a_content_term_is_not_vague(question: str) -> None:
    assert assess(question).vague is False


def test_specific_question_is_not_vague() -> None:
    verdict = assess("What time does the facility open on Saturdays?")
    assert verdict.vague is False
    assert verdict.reason is None


def test_deictic_match_is_whole_word_only() -> None:
    # "thistle" and "items" contain deictic letters but are not deictic words
    assert assess("Do you sell thistle items?").vague is False


def test_config_tunes_thresholds() -> None:
    strict = GuardConfig(min_chars=20, min_content_terms=5)
    assert assess("Opening hours please", strict).vague is False  # exactly 20 chars
    assert assess("Opening hours?", strict).vague is True
    assert assess("Is that open on Saturdays?", strict).vague is True


def test_rules_are_ordered_table() -> None:
    assert [r.name for r in DEFAULT_RULES] == ["too_short", "deictic_reference"]
    # "it" is both short and deictic; first rule wins
    assert assess("it").reason == "too_short"


def test_clarification_message_gives_examples() -> None:
    assert CLARIFICATION_MESSAGE.startswith("Could you clarify your question?")
    assert '"What are your hours?"' in CLARIFICATION_MESSAGE
