from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from importlib import import_module
from typing import Any, cast

from guest_assistant.application.ports.vector_store_port import (
    Chunk,
    ScoredChunk,
    VectorStorePort,
)
from guest_assistant.domain.errors import VectorStoreError


@dataclass
class FaissVectorStoreAdapter(VectorStorePort):
    index: Any | None = field(default=None, init=False)
    chunks: dict[int, Chunk] = field(default_factory=dict, init=False)
    next_idx: int = 0
    collection: str = "guest_docs"

    def _require_modules(self) -> tuple[Any, Any]:  # pragma: no cover
        try:
            faiss = import_module("faiss")
            np = import_module("numpy")
        except Exception as ex:  # pragma: no cover
            raise VectorStoreError(
                "faiss-cpu and numpy are required for FaissVectorStoreAdapter"
            ) from ex
        return cast(Any, np), cast(Any, faiss)

    async def ensure_collection(self, name: str, dim: int) -> None:
        self.collection = name
        try:
            _np, faiss = self._require_modules()
            self.index = faiss.IndexFlatIP(dim)  # inner product on unit vectors
            self.chunks = {}
            self.next_idx = 0
        except VectorStoreError:
            raise  # Re-raise domain errors
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Failed to create FAISS index: {ex}") from ex

    async def upsert(self, chunks: Sequence[Chunk], vectors: Sequence[Sequence[float]]) -> None:
        if self.index is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        if len(chunks) != len(vectors):
            raise VectorStoreError(f"Got {len(vectors)} vectors for {len(chunks)} chunks")
        if not chunks:
            return
        try:
            np, faiss = self._require_modules()
            arr = np.array(vectors, dtype=np.float32)
            faiss.normalize_L2(arr)
            base = self.next_idx
            self.index.add(arr)
            for i, chunk in enumerate(chunks):
                self.chunks[base + i] = chunk
            self.next_idx += len(chunks)
        except VectorStoreError:
            raise  # Re-raise domain errors
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Upsert failed: {ex}") from ex

    async def search(self, query_vector: Sequence[float], top_k: int = 3) -> list[ScoredChunk]:
        if self.index is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        try:
            np, faiss = self._require_modules()
            q = np.array([query_vector], dtype=np.float32)
            faiss.normalize_L2(q)
            scores, idxs = await asyncio.to_thread(self.index.search, q, top_k)
            out: list[ScoredChunk] = []
            for score, idx in zip(scores[0], idxs[0], strict=False):
                if int(idx) == -1:
                    continue
                out.append(
                    ScoredChunk(
                        chunk=self.chunks[int(idx)],
                        distance=max(0.0, 1.0 - float(score)),
                    )
                )
            return out
        except VectorStoreError:
            raise  # Re-raise domain errors
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Search failed: {ex}") from ex

    def count(self) -> int:
        return len(self.chunks)
