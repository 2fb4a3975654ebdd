from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, cast

from guest_assistant.application.ports.embedding_port import EmbeddingPort
from guest_assistant.domain.errors import EmbeddingError

# Lazy import for testability (allow monkeypatching fake SentenceTransformer)
SentenceTransformer: Any | None
try:  # pragma: no cover - exercised via tests with monkeypatch
    from sentence_transformers import SentenceTransformer as _SentenceTransformer
except Exception:  # noqa: BLE001
    SentenceTransformer = None
else:  # pragma: no cover - exercised in integration
    SentenceTransformer = _SentenceTransformer


@dataclass
class HFEmbeddingAdapter(EmbeddingPort):
    """HuggingFace Sentence-Transformers adapter (local embeddings, no API key).

    Encoding is CPU/GPU bound, so it runs in a worker thread to keep the
    event loop free for other requests.
    """

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"  # switch to "cuda" when available
    local_files_only: bool = False  # support offline deployments
    query_prefix: str = ""  # e.g. "query: " for e5-style models
    passage_prefix: str = ""  # e.g. "passage: "
    _model: Any | None = None

    def _ensure_model(self) -> Any:
        if self._model is not None:
            return self._model
        if SentenceTransformer is None:
            raise EmbeddingError("sentence-transformers not installed.")
        try:
            self._model = SentenceTransformer(
                self.model_name,
                device=self.device,
                local_files_only=self.local_files_only,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(
                f"Failed to load embedding model '{self.model_name}': {ex}"
            ) from ex
        return self._model

    def _encode_texts(self, texts: Sequence[str]) -> list[list[float]]:
        model = self._ensure_model()
        try:
            inputs = [f"{self.passage_prefix}{t}" for t in texts]
            raw_vectors = model.encode(
                inputs,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"Embedding texts failed: {ex}") from ex
        vectors = cast(Sequence[Sequence[float]], raw_vectors)
        return [list(map(float, vec)) for vec in vectors]

    def _encode_query(self, text: str) -> list[float]:
        model = self._ensure_model()
        try:
            raw_vector = model.encode(
                f"{self.query_prefix}{text}",
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"Embedding query failed: {ex}") from ex
        vector = cast(Sequence[float], raw_vector)
        return [float(x) for x in vector]

    async def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        return await asyncio.to_thread(self._encode_texts, list(texts))

    async def embed_query(self, text: str) -> list[float]:
        return await asyncio.to_thread(self._encode_query, text)
