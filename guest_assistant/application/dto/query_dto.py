# guest_assistant/application/dto/query_dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from guest_assistant.domain.models import Outcome, OutcomeKind, SourceRef


@dataclass(frozen=True)
class AskRequest:
    """
    DTO for asking a question.

    - question: user question (non-empty after trimming)
    """

    question: str

    @property
    def normalized(self) -> str:
        return (self.question or "").strip()


@dataclass(frozen=True)
class AskResponse:
    """Answer text plus deduplicated sources, as exposed to callers."""

    answer: str
    sources: list[SourceRef] = field(default_factory=list)
    outcome: OutcomeKind = OutcomeKind.ANSWERED

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> AskResponse:
        return cls(answer=outcome.text, sources=list(outcome.sources), outcome=outcome.kind)

    def to_dict(self) -> dict[str, Any]:
        return {"answer": self.answer, "sources": [s.to_dict() for s in self.sources]}
