from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class LLMResponse:
    text: str
    finish_reason: str = "stop"
    usage_tokens: int | None = None


class LLMPort(Protocol):
    async def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.2, max_tokens: int = 250
    ) -> LLMResponse: ...

    async def generate(
        self, system: str, prompt: str, temperature: float = 0.2, max_tokens: int = 250
    ) -> str:
        """Convenience method for one system instruction plus one user prompt.

        Args:
            system: The system instruction
            prompt: The user prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text string

        Note:
            Default implementation uses chat with a system and a user message.
            Adapters can override for direct completion APIs.
        """
        messages = [
            ChatMessage(role="system", content=system),
            ChatMessage(role="user", content=prompt),
        ]
        response = await self.chat(messages, temperature=temperature, max_tokens=max_tokens)
        return response.text
