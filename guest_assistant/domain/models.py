# guest_assistant/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

UNKNOWN_SOURCE = "unknown"

_BRACKETED = re.compile(r"\[([0-9,\s]+)\]")


def bracketed_integers(text: str) -> list[int]:
    """Return positive integers found inside square brackets, in order of appearance.

    Accepts ``[1]``, ``[1][2]`` and comma lists like ``[1, 3]``. Duplicates are kept.
    """
    found: list[int] = []
    for group in _BRACKETED.findall(text or ""):
        for part in group.split(","):
            part = part.strip()
            if part.isdigit() and int(part) > 0:
                found.append(int(part))
    return found


@dataclass(frozen=True)
class Chunk:
    """
    Immutable passage created by offline ingestion.

    - id:        positional index of the chunk in the snapshot
    - text:      the passage text
    - metadata:  immutable metadata mapping, at least {"source": filename}
    """

    id: int
    text: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> str:
        return str(self.metadata.get("source") or UNKNOWN_SOURCE)


@dataclass(frozen=True)
class ScoredChunk:
    """A retrieved chunk with its distance to the query (lower = more relevant)."""

    chunk: Chunk
    distance: float


@dataclass(frozen=True)
class EvidenceBlock:
    """A chunk that passed the distance gate, numbered for citation."""

    citation_index: int
    chunk: Chunk

    @property
    def source(self) -> str:
        return self.chunk.source


@dataclass(frozen=True)
class Answer:
    """Generated answer text; cited indices are derived from the text."""

    text: str

    @property
    def cited_indices(self) -> frozenset[int]:
        return frozenset(bracketed_integers(self.text))


@dataclass(frozen=True)
class SourceRef:
    """Source reference exposed to the caller."""

    id: int
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "source": self.source}


@dataclass(frozen=True)
class SnapshotRecord:
    """One record of the flat snapshot format."""

    text: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "metadata": dict(self.metadata)}


class OutcomeKind(str, Enum):
    CLARIFY = "clarify"
    REFUSE = "refuse"
    ANSWERED = "answered"
    ERROR = "error"


@dataclass(frozen=True)
class Clarify:
    """Question too vague to retrieve against."""

    text: str
    kind: ClassVar[OutcomeKind] = OutcomeKind.CLARIFY

    @property
    def sources(self) -> tuple[SourceRef, ...]:
        return ()


@dataclass(frozen=True)
class Refuse:
    """No trustworthy evidence; never carries sources."""

    text: str
    reason: str = "no_evidence"
    kind: ClassVar[OutcomeKind] = OutcomeKind.REFUSE

    @property
    def sources(self) -> tuple[SourceRef, ...]:
        return ()


@dataclass(frozen=True)
class Answered:
    """Grounded answer with deduplicated sources."""

    text: str
    sources: tuple[SourceRef, ...] = ()
    citation_fallback: bool = False
    kind: ClassVar[OutcomeKind] = OutcomeKind.ANSWERED


@dataclass(frozen=True)
class Failed:
    """A collaborator failed; text is a generic message with no internal detail."""

    text: str
    kind: ClassVar[OutcomeKind] = OutcomeKind.ERROR

    @property
    def sources(self) -> tuple[SourceRef, ...]:
        return ()


Outcome = Clarify | Refuse | Answered | Failed
