"""Application ports package.

Re-exports the ports from their individual modules.
"""

from guest_assistant.application.ports.document_loader_port import (
    DocumentLoaderPort,
    DocumentPayload,
)
from guest_assistant.application.ports.embedding_port import EmbeddingPort
from guest_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from guest_assistant.application.ports.snapshot_port import SnapshotStorePort
from guest_assistant.application.ports.telemetry_port import TelemetryPort
from guest_assistant.application.ports.vector_store_port import ScoredChunk, VectorStorePort

__all__ = [
    "DocumentLoaderPort",
    "DocumentPayload",
    "EmbeddingPort",
    "LLMPort",
    "ChatMessage",
    "LLMResponse",
    "ScoredChunk",
    "SnapshotStorePort",
    "TelemetryPort",
    "VectorStorePort",
]
