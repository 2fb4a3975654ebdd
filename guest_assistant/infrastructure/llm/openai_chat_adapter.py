from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from guest_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from guest_assistant.domain.errors import LLMError


@dataclass
class OpenAIChatAdapter(LLMPort):
    """Chat completions against OpenAI or any OpenAI-compatible server (vLLM, Ollama)."""

    base_url: str | None = None  # None = api.openai.com, e.g. "http://localhost:8000/v1"
    api_key: str | None = None
    model: str = "gpt-4o-mini"

    def __post_init__(self) -> None:
        # Defer import of OpenAI to chat() to avoid hard dependency in tests
        self._client: Any | None = None

    async def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.2, max_tokens: int = 250
    ) -> LLMResponse:
        try:
            if self._client is None:
                module = import_module("openai")
                AsyncOpenAI = module.AsyncOpenAI
                self._client = AsyncOpenAI(
                    base_url=self.base_url or None, api_key=self.api_key or None
                )
            assert self._client is not None
            payload: Any = [m.__dict__ for m in messages]
            resp: Any = await self._client.chat.completions.create(
                model=self.model,
                messages=cast(Any, payload),
                temperature=temperature,
                max_tokens=max_tokens,
            )
            choice = resp.choices[0]
            usage = getattr(resp, "usage", None)
            return LLMResponse(
                text=choice.message.content or "",
                finish_reason=choice.finish_reason or "stop",
                usage_tokens=getattr(usage, "total_tokens", None),
            )
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            raise LLMError(f"LLM communication failed: {ex}") from ex
