from __future__ import annotations

import logging
from dataclasses import dataclass

from ..ports.embedding_port import EmbeddingPort
from ..ports.snapshot_port import SnapshotStorePort
from ..ports.vector_store_port import VectorStorePort
from ...domain.errors import SnapshotError

logger = logging.getLogger(__name__)


@dataclass
class BootstrapIndex:
    """Load the snapshot, re-embed every chunk and fill the vector store.

    Runs once at process start; the store is read-only afterwards.
    """

    snapshot_store: SnapshotStorePort
    embedding: EmbeddingPort
    vector_store: VectorStorePort
    collection: str = "guest_docs"

    async def execute(self) -> int:
        # 1) Snapshot laden
        chunks = self.snapshot_store.load()
        if not chunks:
            raise SnapshotError("snapshot contains no chunks - run ingest first")

        # 2) Embeddings (vectors are never persisted, so recompute here)
        vectors = await self.embedding.embed_texts([c.text for c in chunks])
        if len(vectors) != len(chunks):
            raise SnapshotError(
                f"embedding returned {len(vectors)} vectors for {len(chunks)} chunks"
            )

        # 3) VectorStore füllen
        await self.vector_store.ensure_collection(self.collection, dim=len(vectors[0]))
        await self.vector_store.upsert(chunks, vectors)

        logger.info(
            "index ready: %d chunk(s) in collection '%s' (%s)",
            len(chunks),
            self.collection,
            type(self.vector_store).__name__,
        )
        return len(chunks)
