# guest_assistant/application/use_cases/answer_question.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from guest_assistant.application.dto.query_dto import AskRequest
from guest_assistant.application.services.answer_composer import AnswerComposer
from guest_assistant.application.services.retriever import Retriever
from guest_assistant.domain.errors import ValidationError
from guest_assistant.domain.models import Answered, Clarify, Failed, Outcome, Refuse
from guest_assistant.domain.services.citation_resolution import resolve_sources
from guest_assistant.domain.services.context_assembly import assemble
from guest_assistant.domain.services.keyword_overlap import has_keyword_overlap
from guest_assistant.domain.services.query_expansion import (
    DEFAULT_RULES as DEFAULT_EXPANSION_RULES,
)
from guest_assistant.domain.services.query_expansion import ExpansionRule, expand
from guest_assistant.domain.services.query_guard import (
    CLARIFICATION_MESSAGE,
    GuardConfig,
    assess,
)

if TYPE_CHECKING:
    from guest_assistant.application.ports.telemetry_port import TelemetryPort

logger = logging.getLogger(__name__)

NO_EVIDENCE_MESSAGE = "I don't know based on the provided documents."
LOW_OVERLAP_MESSAGE = (
    "I don't know based on the provided documents. "
    'Try a more specific question, e.g., "What are seasonal hours?"'
)
GENERIC_FAILURE_MESSAGE = "Server error"


class AnswerQuestion:
    """
    Response policy: Start → {Clarify | Retrieving}, Retrieving → {Refuse | Composing},
    Composing → {Answered | Error}. One transition out of Start, no retries,
    nothing kept between requests.

    Empty questions raise ValidationError (input error, reported by the caller).
    Every other path ends in exactly one Outcome.
    """

    def __init__(
        self,
        retriever: Retriever,
        composer: AnswerComposer,
        guard: GuardConfig | None = None,
        expansion_rules: Sequence[ExpansionRule] = DEFAULT_EXPANSION_RULES,
        require_keyword_overlap: bool = False,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.retriever = retriever
        self.composer = composer
        self.guard = guard or GuardConfig()
        self.expansion_rules = tuple(expansion_rules)
        self.require_keyword_overlap = require_keyword_overlap
        self.telemetry = telemetry

    async def execute(self, req: AskRequest | str) -> Outcome:
        question = req.normalized if isinstance(req, AskRequest) else (req or "").strip()
        if not question:
            raise ValidationError("question must not be empty")

        outcome = await self._run(question)
        self._record(outcome)
        return outcome

    async def _run(self, question: str) -> Outcome:
        # 1) Guard
        verdict = assess(question, self.guard)
        if verdict.vague:
            logger.info("clarify: rule=%s", verdict.reason)
            return Clarify(text=CLARIFICATION_MESSAGE)

        try:
            # 2) Expand + retrieve (expanded text is for retrieval only)
            expanded = expand(question, self.expansion_rules)
            gate = await self.retriever.retrieve(expanded)
            if gate.best_distance is not None:
                self._observe("guest_assistant.retrieval.best_distance", gate.best_distance)

            if not gate.passed:
                logger.info("refuse: no evidence (best=%s)", gate.best_distance)
                return Refuse(text=NO_EVIDENCE_MESSAGE, reason="no_evidence")

            if gate.used_single_best_fallback:
                logger.info("evidence filter emptied, using best chunk alone")

            chunks = [sc.chunk for sc in gate.evidence]
            if self.require_keyword_overlap and not has_keyword_overlap(question, chunks[0].text):
                logger.info("refuse: best chunk shares no keyword with the question")
                return Refuse(text=LOW_OVERLAP_MESSAGE, reason="no_keyword_overlap")

            # 3) Assemble + compose
            context = assemble(chunks)
            answer = await self.composer.compose(question, context.prompt_block)
        except Exception:  # noqa: BLE001
            logger.exception("collaborator failure while answering")
            return Failed(text=GENERIC_FAILURE_MESSAGE)

        # 4) Resolve citations
        resolution = resolve_sources(answer.text, context.evidence)
        if resolution.fallback_used:
            logger.info("no valid citation, exposing all %d source(s)", len(context.evidence))
        logger.info(
            "answered: evidence=%d cited=%s sources=%d",
            len(context.evidence),
            list(resolution.cited),
            len(resolution.sources),
        )
        return Answered(
            text=answer.text,
            sources=resolution.sources,
            citation_fallback=resolution.fallback_used,
        )

    def _record(self, outcome: Outcome) -> None:
        if self.telemetry is not None:
            self.telemetry.incr("guest_assistant.outcomes", {"kind": outcome.kind.value})

    def _observe(self, name: str, value: float) -> None:
        if self.telemetry is not None:
            self.telemetry.observe(name, value, {})
