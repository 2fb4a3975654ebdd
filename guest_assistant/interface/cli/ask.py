"""One-shot CLI: bootstrap the index, ask a single question, print answer and sources."""

import argparse
import asyncio

from guest_assistant.application.dto.query_dto import AskRequest
from guest_assistant.config.composition import build_ready_answer_use_case
from guest_assistant.config.logging_config import configure_logging
from guest_assistant.config.settings import AppSettings
from guest_assistant.domain.errors import DomainError
from guest_assistant.domain.models import Outcome, OutcomeKind


def format_outcome(question: str, outcome: Outcome) -> str:
    lines = [f"Q: {question}", "", f"A: {outcome.text}"]
    if outcome.sources:
        lines += ["", "Sources:"]
        lines += [f"[{s.id}] {s.source}" for s in outcome.sources]
    return "\n".join(lines)


async def run(question: str, settings: AppSettings) -> Outcome:
    uc = await build_ready_answer_use_case(settings)
    return await uc.execute(AskRequest(question=question))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser("ask", description="Ask the corpus a question.")
    parser.add_argument("question", nargs="+")
    args = parser.parse_args(argv)

    settings = AppSettings()
    configure_logging(settings.log_level)
    question = " ".join(args.question).strip()
    if not question:
        print('Please pass a question, e.g.: ask "What time does the zoo open?"')
        return 1

    try:
        outcome = asyncio.run(run(question, settings))
    except DomainError as ex:
        print(f"[ERROR] {type(ex).__name__}: {ex}")
        return 1

    print(format_outcome(question, outcome))
    return 1 if outcome.kind is OutcomeKind.ERROR else 0


if __name__ == "__main__":
    raise SystemExit(main())
