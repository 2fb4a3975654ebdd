from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from guest_assistant.domain.types import Vector


@runtime_checkable
class EmbeddingPort(Protocol):
    async def embed_texts(self, texts: Sequence[str]) -> list[Vector]: ...

    async def embed_query(self, text: str) -> Vector: ...
