from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from guest_assistant.application.ports.embedding_port import EmbeddingPort
from guest_assistant.domain.errors import EmbeddingError


@dataclass
class OpenAIEmbeddingAdapter(EmbeddingPort):
    """OpenAI-compatible embeddings endpoint (defaults to text-embedding-3-small)."""

    model: str = "text-embedding-3-small"
    api_key: str | None = None
    base_url: str | None = None
    batch_size: int = 256

    def __post_init__(self) -> None:
        # Defer import of OpenAI to first use to avoid hard dependency in tests
        self._client: Any | None = None

    def _get_client(self) -> Any:
        if self._client is None:
            module = import_module("openai")
            self._client = module.AsyncOpenAI(
                api_key=self.api_key or None,
                base_url=self.base_url or None,
            )
        return self._client

    async def _embed(self, inputs: list[str]) -> list[list[float]]:
        try:
            client = self._get_client()
            resp: Any = await client.embeddings.create(model=self.model, input=inputs)
            ordered = sorted(resp.data, key=lambda d: d.index)
            return [[float(x) for x in d.embedding] for d in ordered]
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            raise EmbeddingError(f"Embedding request failed: {ex}") from ex

    async def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        out: list[list[float]] = []
        items = list(texts)
        for start in range(0, len(items), self.batch_size):
            out.extend(await self._embed(items[start : start + self.batch_size]))
        return out

    async def embed_query(self, text: str) -> list[float]:
        vectors = await self._embed([text])
        if not vectors:
            raise EmbeddingError("Embedding request returned no vector")
        return vectors[0]
