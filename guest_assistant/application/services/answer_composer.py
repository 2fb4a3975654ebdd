from __future__ import annotations

from guest_assistant.application.ports.llm_port import LLMPort
from guest_assistant.domain.models import Answer
from guest_assistant.domain.services.refusal import REFUSAL_PHRASE, normalize_refusal

SYSTEM_PROMPT = " ".join(
    [
        "You are a concise guest assistant.",
        "Use ONLY the context blocks provided.",
        "Do not add facts not present in the context.",
        f'If the answer is not in the context, say exactly: "{REFUSAL_PHRASE}."',
        "Cite every block you used with its bracketed number, e.g. [1], [2].",
        "If the answer naturally contains multiple items, present them as concise bullet points.",
        "If context is ambiguous or conflicting, briefly note that and ask for clarification.",
        "Keep answers short and professional. Use a friendly, neutral tone "
        "suitable for guest communications.",
    ]
)


def build_user_prompt(question: str, prompt_block: str) -> str:
    return (
        f"Question: {question}\n\n"
        f"Context blocks:\n{prompt_block}\n\n"
        "Requirements:\n"
        "- Answer using only the context.\n"
        f'- If missing, say "{REFUSAL_PHRASE}."\n'
        "- Include citations like [1], [2].\n"
    )


class AnswerComposer:
    """Grounded answer generation; low temperature and bounded length favour factuality."""

    def __init__(self, llm: LLMPort, temperature: float = 0.2, max_tokens: int = 250) -> None:
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def compose(self, question: str, prompt_block: str) -> Answer:
        raw = await self.llm.generate(
            SYSTEM_PROMPT,
            build_user_prompt(question, prompt_block),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return Answer(text=normalize_refusal(raw))
