from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from guest_assistant.application.ports.vector_store_port import (
    Chunk,
    ScoredChunk,
    VectorStorePort,
)
from guest_assistant.domain.errors import VectorStoreError


def _normalize_rows(matrix: Any) -> Any:
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0.0] = 1.0
    return matrix / norms


@dataclass
class InMemoryVectorStore(VectorStorePort):
    """Exact cosine search over a numpy matrix, held in process memory.

    Filled once at startup; search only reads the matrix, so concurrent
    requests need no locking.
    """

    collection: str = "guest_docs"
    _matrix: Any | None = field(default=None, init=False, repr=False)
    _chunks: list[Chunk] = field(default_factory=list, init=False, repr=False)
    _dim: int | None = field(default=None, init=False)

    async def ensure_collection(self, name: str, dim: int) -> None:
        if dim <= 0:
            raise VectorStoreError(f"Invalid vector dimension: {dim}")
        self.collection = name
        self._dim = dim
        self._matrix = np.zeros((0, dim), dtype=np.float32)
        self._chunks = []

    async def upsert(self, chunks: Sequence[Chunk], vectors: Sequence[Sequence[float]]) -> None:
        if self._matrix is None or self._dim is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        if len(chunks) != len(vectors):
            raise VectorStoreError(f"Got {len(vectors)} vectors for {len(chunks)} chunks")
        if not chunks:
            return
        try:
            arr = np.asarray(vectors, dtype=np.float32)
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Upsert failed: {ex}") from ex
        if arr.ndim != 2 or arr.shape[1] != self._dim:
            raise VectorStoreError(f"Expected vectors of dimension {self._dim}, got {arr.shape}")
        self._matrix = np.vstack([self._matrix, _normalize_rows(arr)])
        self._chunks.extend(chunks)

    def _search_sync(self, query_vector: Sequence[float], top_k: int) -> list[ScoredChunk]:
        q = np.asarray(query_vector, dtype=np.float32)
        norm = float(np.linalg.norm(q)) or 1.0
        sims = self._matrix @ (q / norm)
        k = min(top_k, len(self._chunks))
        order = np.argsort(-sims, kind="stable")[:k]
        return [
            ScoredChunk(chunk=self._chunks[int(i)], distance=max(0.0, 1.0 - float(sims[int(i)])))
            for i in order
        ]

    async def search(self, query_vector: Sequence[float], top_k: int = 3) -> list[ScoredChunk]:
        if self._matrix is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        if not self._chunks:
            return []
        try:
            return await asyncio.to_thread(self._search_sync, query_vector, top_k)
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Search failed: {ex}") from ex

    def count(self) -> int:
        return len(self._chunks)
