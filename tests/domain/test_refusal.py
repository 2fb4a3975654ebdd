import pytest

from guest_assistant.domain.models import Chunk, EvidenceBlock, SourceRef
from guest_assistant.domain.services.citation_resolution import resolve_sources
from guest_assistant.domain.services.refusal import REFUSAL_PHRASE, is_refusal, normalize_refusal


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("I don't know.", "I don't know."),
        ("  I don't know.  ", "I don't know."),
        ("I dont know.", "I don't know."),
        ("I do not know the answer.", "I don't know the answer."),
        ("i DON'T KNOW.", "I don't know."),
        ("I don’t know.", "I don't know."),
        ("I don't knwo.", "I don't know."),
        ("I don;t know the hours.", "I don't know the hours."),
    ],
)
def test_near_misses_are_rewritten(raw: str, expected: str) -> None:
    assert normalize_refusal(raw) == expected
    assert is_refusal(normalize_refusal(raw))


@pytest.mark.parametrize(
    "raw",
    [
        "I do know the hours: 9 to 5 [1].",
        "The park opens at 9 [1].",
        "If you don't know the way, ask staff [2].",
        "I won't know until Friday, but the gate opens at 9 [1].",
        "I can't know for sure, but the lot holds 200 cars [1].",
        "I didn't know either: tickets are sold at gate A [2].",
        "I doesn't know anything else [1].",
    ],
)
def test_real_answers_are_untouched(raw: str) -> None:
    assert normalize_refusal(raw) == raw
    assert not is_refusal(raw)


def test_empty_text():
    assert normalize_refusal("") == ""
    assert is_refusal("") is False


def test_phrase_constant():
    assert REFUSAL_PHRASE == "I don't know"


def test_cited_answer_with_other_contraction_keeps_its_sources():
    chunk = Chunk(id=0, text="Gate opens at 9.", metadata={"source": "hours.txt"})
    evidence = [EvidenceBlock(citation_index=1, chunk=chunk)]
    text = normalize_refusal("I won't know until Friday, but the gate opens at 9 [1].")
    assert resolve_sources(text, evidence).sources == (SourceRef(id=1, source="hours.txt"),)
