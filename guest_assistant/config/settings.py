"""Application settings with environment-driven configuration.

Why: Single place that reads env (and .env); threshold and top-k are
corpus/embedding dependent and must be tunable without code changes.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from guest_assistant.domain.errors import ValidationError

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    All other layers receive settings via dependency injection.
    """

    # ===== Corpus / Snapshot =====
    snapshot_path: str = field(default_factory=lambda: os.getenv("SNAPSHOT_PATH", "index.json"))
    data_dir: str = field(default_factory=lambda: os.getenv("DATA_DIR", "data"))
    chunk_size: int = field(default_factory=lambda: int(os.getenv("CHUNK_SIZE", "500")))
    chunk_overlap: int = field(default_factory=lambda: int(os.getenv("CHUNK_OVERLAP", "50")))

    # ===== Vector Store Configuration =====
    vector_backend: str = field(
        default_factory=lambda: os.getenv("VECTOR_BACKEND", "memory").lower()
    )
    # Supported: "memory" | "chroma" | "faiss"

    collection: str = field(default_factory=lambda: os.getenv("VECTOR_COLLECTION", "guest_docs"))
    chroma_dir: str = field(default_factory=lambda: os.getenv("CHROMA_DIR", ""))
    # Empty = ephemeral Chroma client (the snapshot is re-embedded at every start anyway)

    # ===== Embedding Configuration =====
    embedding_backend: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_BACKEND", "openai").lower()
    )
    # Supported: "openai" | "hf"

    embedding_model: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
    )
    embedding_device: str = field(default_factory=lambda: os.getenv("EMBEDDING_DEVICE", "cpu"))
    # Supported: "cpu" | "cuda" | "mps" (hf backend only)

    # ===== LLM Configuration =====
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", ""))
    # Empty = api.openai.com; set for vLLM/Ollama or other OpenAI-compatible servers

    llm_api_key: str = field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", "")
    )
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.2"))
    )
    llm_max_tokens: int = field(default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "250")))

    # ===== Retrieval / Guard Configuration =====
    retrieval_top_k: int = field(default_factory=lambda: int(os.getenv("RETRIEVAL_TOP_K", "3")))
    retrieval_max_distance: float = field(
        default_factory=lambda: float(os.getenv("RETRIEVAL_MAX_DISTANCE", "0.55"))
    )
    # Cosine distance; lower = more relevant

    guard_min_chars: int = field(default_factory=lambda: int(os.getenv("GUARD_MIN_CHARS", "8")))
    guard_min_content_terms: int = field(
        default_factory=lambda: int(os.getenv("GUARD_MIN_CONTENT_TERMS", "1"))
    )
    require_keyword_overlap: bool = field(
        default_factory=lambda: _flag("REQUIRE_KEYWORD_OVERLAP", "false")
    )
    # Refuse when the best chunk shares no meaningful word with the question

    # ===== HTTP Configuration =====
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: tuple(
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        )
    )

    # ===== Logging / Telemetry =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    telemetry_enabled: bool = field(default_factory=lambda: _flag("TELEMETRY_ENABLED", "false"))
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )

    def validate(self) -> "AppSettings":
        if self.retrieval_top_k <= 0:
            raise ValidationError("RETRIEVAL_TOP_K must be > 0")
        if self.retrieval_max_distance < 0:
            raise ValidationError("RETRIEVAL_MAX_DISTANCE must be >= 0")
        if self.chunk_size <= 0 or not (0 <= self.chunk_overlap < self.chunk_size):
            raise ValidationError("CHUNK_OVERLAP must be >= 0 and < CHUNK_SIZE")
        if self.vector_backend not in ("memory", "chroma", "faiss"):
            raise ValidationError(f"Unsupported VECTOR_BACKEND '{self.vector_backend}'")
        if self.embedding_backend not in ("openai", "hf"):
            raise ValidationError(f"Unsupported EMBEDDING_BACKEND '{self.embedding_backend}'")
        return self
