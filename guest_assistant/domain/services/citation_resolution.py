"""Map the citations a generated answer actually uses back to source files.

Policy:
- refusal text never exposes sources
- only indices 1..N of the assembled evidence are honoured
- if nothing valid was cited, fail open and expose every evidence source
- sources are deduplicated by filename, first occurrence wins
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import EvidenceBlock, SourceRef, bracketed_integers
from .refusal import is_refusal


@dataclass(frozen=True)
class CitationResolution:
    sources: tuple[SourceRef, ...]
    cited: tuple[int, ...] = ()
    fallback_used: bool = False


def parse_citations(text: str) -> list[int]:
    """Bracketed positive integers in order of first appearance, without repeats."""
    seen: list[int] = []
    for n in bracketed_integers(text):
        if n not in seen:
            seen.append(n)
    return seen


def dedupe_sources(blocks: Sequence[EvidenceBlock]) -> tuple[SourceRef, ...]:
    refs: list[SourceRef] = []
    seen: set[str] = set()
    for b in blocks:
        if b.source in seen:
            continue
        seen.add(b.source)
        refs.append(SourceRef(id=b.citation_index, source=b.source))
    return tuple(refs)


def resolve_sources(answer_text: str, evidence: Sequence[EvidenceBlock]) -> CitationResolution:
    if is_refusal(answer_text):
        return CitationResolution(sources=())

    by_index = {b.citation_index: b for b in evidence}
    valid = sorted(n for n in parse_citations(answer_text) if n in by_index)
    if valid:
        cited_blocks = [by_index[n] for n in valid]
        return CitationResolution(sources=dedupe_sources(cited_blocks), cited=tuple(valid))

    return CitationResolution(sources=dedupe_sources(evidence), fallback_used=True)
