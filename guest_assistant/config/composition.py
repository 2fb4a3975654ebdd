"""Composition root: the only place that picks adapters from settings."""

from guest_assistant.application.ports.embedding_port import EmbeddingPort
from guest_assistant.application.ports.llm_port import LLMPort
from guest_assistant.application.ports.telemetry_port import TelemetryPort
from guest_assistant.application.ports.vector_store_port import VectorStorePort
from guest_assistant.application.services.answer_composer import AnswerComposer
from guest_assistant.application.services.retriever import Retriever
from guest_assistant.application.use_cases.answer_question import AnswerQuestion
from guest_assistant.application.use_cases.bootstrap_index import BootstrapIndex
from guest_assistant.application.use_cases.ingest_corpus import IngestCorpus
from guest_assistant.config.settings import AppSettings
from guest_assistant.domain.services.query_guard import GuardConfig
from guest_assistant.infrastructure.parsing.text_file_loader import CorpusFileLoader
from guest_assistant.infrastructure.snapshot.json_snapshot_store import JsonSnapshotStore
from guest_assistant.infrastructure.telemetry.otel_adapter import (
    NullTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)


def build_embedding(settings: AppSettings) -> EmbeddingPort:
    if settings.embedding_backend == "hf":
        from guest_assistant.infrastructure.embeddings.hf_sentence_transformers import (
            HFEmbeddingAdapter,
        )

        return HFEmbeddingAdapter(
            model_name=settings.embedding_model,
            device=settings.embedding_device,
        )

    from guest_assistant.infrastructure.embeddings.openai_embeddings import (
        OpenAIEmbeddingAdapter,
    )

    return OpenAIEmbeddingAdapter(
        model=settings.embedding_model,
        api_key=settings.llm_api_key or None,
        base_url=settings.llm_base_url or None,
    )


def build_vector_store(settings: AppSettings) -> VectorStorePort:
    backend = settings.vector_backend

    if backend == "chroma":
        from guest_assistant.infrastructure.vectorstore.chroma_vector_store import (
            ChromaVectorStoreAdapter,
        )

        return ChromaVectorStoreAdapter(
            persist_dir=settings.chroma_dir,
            collection=settings.collection,
        )

    if backend == "faiss":
        from guest_assistant.infrastructure.vectorstore.faiss_vector_store import (
            FaissVectorStoreAdapter,
        )

        return FaissVectorStoreAdapter(collection=settings.collection)

    from guest_assistant.infrastructure.vectorstore.memory_vector_store import (
        InMemoryVectorStore,
    )

    return InMemoryVectorStore(collection=settings.collection)


def build_llm(settings: AppSettings) -> LLMPort:
    from guest_assistant.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter

    return OpenAIChatAdapter(
        base_url=settings.llm_base_url or None,
        api_key=settings.llm_api_key or None,
        model=settings.llm_model,
    )


def build_telemetry(settings: AppSettings) -> TelemetryPort:
    """OpenTelemetryAdapter when enabled (degrades to no-op without opentelemetry-sdk)."""
    if not settings.telemetry_enabled:
        return NullTelemetry()
    cfg = OtelConfig(
        service_name="guest-assistant",
        otlp_endpoint=settings.otlp_endpoint or None,
        environment=settings.telemetry_environment,
        enable_console=False,
    )
    return OpenTelemetryAdapter(cfg)


def build_ingest_use_case(settings: AppSettings | None = None) -> IngestCorpus:
    settings = settings or AppSettings()
    return IngestCorpus(
        loader=CorpusFileLoader(),
        snapshot_store=JsonSnapshotStore(path=settings.snapshot_path),
    )


def build_bootstrap_use_case(
    settings: AppSettings,
    embedding: EmbeddingPort,
    vector_store: VectorStorePort,
) -> BootstrapIndex:
    return BootstrapIndex(
        snapshot_store=JsonSnapshotStore(path=settings.snapshot_path),
        embedding=embedding,
        vector_store=vector_store,
        collection=settings.collection,
    )


def build_answer_use_case(
    settings: AppSettings,
    embedding: EmbeddingPort,
    vector_store: VectorStorePort,
    llm: LLMPort | None = None,
    telemetry: TelemetryPort | None = None,
) -> AnswerQuestion:
    """Wire the response policy around an already-bootstrapped vector store.

    The embedding adapter must be the same one used to build the index so
    query and passage vectors live in the same space.
    """
    retriever = Retriever(
        embedding=embedding,
        vector_store=vector_store,
        max_distance=settings.retrieval_max_distance,
        top_k=settings.retrieval_top_k,
    )
    composer = AnswerComposer(
        llm=llm or build_llm(settings),
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
    return AnswerQuestion(
        retriever=retriever,
        composer=composer,
        guard=GuardConfig(
            min_chars=settings.guard_min_chars,
            min_content_terms=settings.guard_min_content_terms,
        ),
        require_keyword_overlap=settings.require_keyword_overlap,
        telemetry=telemetry or build_telemetry(settings),
    )


async def build_ready_answer_use_case(settings: AppSettings | None = None) -> AnswerQuestion:
    """Bootstrap the index once, then return the shared response policy."""
    settings = (settings or AppSettings()).validate()
    embedding = build_embedding(settings)
    vector_store = build_vector_store(settings)
    await build_bootstrap_use_case(settings, embedding, vector_store).execute()
    return build_answer_use_case(settings, embedding, vector_store)
