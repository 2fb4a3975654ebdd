from __future__ import annotations

import logging

from guest_assistant.application.ports.embedding_port import EmbeddingPort
from guest_assistant.application.ports.vector_store_port import VectorStorePort
from guest_assistant.domain.errors import ValidationError
from guest_assistant.domain.services.distance_gate import GateResult, apply_distance_gate

logger = logging.getLogger(__name__)


class Retriever:
    """
    Embeds the (expanded) query, asks the vector store for the K nearest
    chunks and applies the distance gate.

    Collaborator errors propagate; the response policy turns them into an
    error outcome.
    """

    def __init__(
        self,
        embedding: EmbeddingPort,
        vector_store: VectorStorePort,
        max_distance: float = 0.55,
        top_k: int = 3,
    ) -> None:
        if top_k <= 0:
            raise ValidationError("top_k must be > 0")
        if max_distance < 0:
            raise ValidationError("max_distance must be >= 0")
        self.embedding = embedding
        self.vector_store = vector_store
        self.max_distance = max_distance
        self.top_k = top_k

    async def retrieve(self, expanded_query: str, k: int | None = None) -> GateResult:
        k = self.top_k if k is None else k
        if k <= 0:
            raise ValidationError("k must be > 0")

        q_vec = await self.embedding.embed_query(expanded_query)
        candidates = await self.vector_store.search(q_vec, k)
        gate = apply_distance_gate(candidates, max_distance=self.max_distance, k=k)

        logger.debug(
            "retrieved %d candidate(s), best=%s, accepted=%d",
            len(candidates),
            gate.best_distance,
            len(gate.evidence),
        )
        return gate
