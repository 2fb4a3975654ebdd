from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from guest_assistant.application.ports.vector_store_port import (
    Chunk,
    ScoredChunk,
    VectorStorePort,
)
from guest_assistant.domain.errors import VectorStoreError


@dataclass
class ChromaVectorStoreAdapter(VectorStorePort):
    persist_dir: str = ""  # empty = ephemeral in-process client
    collection: str = "guest_docs"
    _client: Any | None = None
    _coll: Any | None = None

    def __post_init__(self) -> None:
        try:
            chromadb = import_module("chromadb")
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError("chromadb not installed.") from ex
        try:
            if self.persist_dir:
                os.makedirs(self.persist_dir, exist_ok=True)
                self._client = chromadb.PersistentClient(path=self.persist_dir)
            else:
                self._client = chromadb.EphemeralClient()
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Failed to init Chroma at '{self.persist_dir}': {ex}") from ex

    async def ensure_collection(self, name: str, dim: int) -> None:
        del dim  # Chroma collections are dimensionless; embeddings carry their own size
        if self._client is None:
            raise VectorStoreError("Chroma client not initialized.")
        self.collection = name
        try:
            # the snapshot is the source of truth, so start from an empty collection
            existing = {getattr(c, "name", c) for c in self._client.list_collections()}
            if name in existing:
                self._client.delete_collection(name)
            self._coll = self._client.get_or_create_collection(
                name=self.collection,
                metadata={"hnsw:space": "cosine"},
            )
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Failed to ensure collection '{name}': {ex}") from ex

    async def upsert(self, chunks: Sequence[Chunk], vectors: Sequence[Sequence[float]]) -> None:
        if self._coll is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        if not chunks:
            return
        try:
            await asyncio.to_thread(
                self._coll.add,
                ids=[str(c.id) for c in chunks],
                embeddings=[list(vec) for vec in vectors],
                metadatas=[{**dict(c.metadata), "chunk_id": c.id} for c in chunks],
                documents=[c.text for c in chunks],
            )
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Upsert failed: {ex}") from ex

    async def search(self, query_vector: Sequence[float], top_k: int = 3) -> list[ScoredChunk]:
        if self._coll is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        try:
            result = cast(
                dict[str, list[list[Any]]],
                await asyncio.to_thread(
                    self._coll.query,
                    query_embeddings=[list(query_vector)],
                    n_results=top_k,
                ),
            )
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Search failed: {ex}") from ex

        ids = (result.get("ids") or [[]])[0]
        documents = (result.get("documents") or [[]])[0]
        metadatas = (result.get("metadatas") or [[]])[0]
        distances = (result.get("distances") or [[]])[0]

        out: list[ScoredChunk] = []
        for idx, raw_id in enumerate(ids):
            # Chroma liefert Cosine-Distanz (kleiner = besser)
            distance = float(distances[idx]) if idx < len(distances) else float("inf")
            text = documents[idx] if idx < len(documents) and documents[idx] is not None else ""
            metadata = dict(metadatas[idx] or {}) if idx < len(metadatas) else {}
            chunk_id = int(metadata.pop("chunk_id", raw_id))
            out.append(
                ScoredChunk(
                    chunk=Chunk(id=chunk_id, text=str(text), metadata=metadata),
                    distance=max(0.0, distance),
                )
            )
        return out

    def count(self) -> int:
        if self._coll is None:
            return 0
        return int(self._coll.count())
