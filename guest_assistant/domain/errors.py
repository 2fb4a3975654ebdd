"""Domain errors (typed).

Why: Unified error family for the application layer, without infra leaks.
Clarification, refusal and citation fallbacks are outcomes, not errors.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state (missing question, bad settings)."""


class CollaboratorError(DomainError):
    """An external collaborator (embedding, index, completion) failed."""


class EmbeddingError(CollaboratorError):
    """Embedding backend failed or is misconfigured."""


class VectorStoreError(CollaboratorError):
    """Vector store backend failed or is misconfigured."""


class LLMError(CollaboratorError):
    """LLM backend failed or is misconfigured."""


class SnapshotError(DomainError):
    """Snapshot is missing, empty or malformed."""


class DocumentError(DomainError):
    """Document loading failed during offline ingestion."""
