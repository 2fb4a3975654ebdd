from collections.abc import Sequence
from typing import Protocol, runtime_checkable

# Import domain models and re-export for convenience
from guest_assistant.domain.models import Chunk, ScoredChunk

__all__ = ["Chunk", "ScoredChunk", "VectorStorePort"]


@runtime_checkable
class VectorStorePort(Protocol):
    """Build-once/read-many index over chunk vectors.

    search() returns cosine distances (lower = closer). Ordering of the
    result is not relied upon by callers.
    """

    async def ensure_collection(self, name: str, dim: int) -> None: ...

    async def upsert(self, chunks: Sequence[Chunk], vectors: Sequence[Sequence[float]]) -> None: ...

    async def search(self, query_vector: Sequence[float], top_k: int = 3) -> list[ScoredChunk]: ...

    def count(self) -> int: ...
