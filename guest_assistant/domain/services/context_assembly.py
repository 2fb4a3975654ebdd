from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Chunk, EvidenceBlock


@dataclass(frozen=True)
class AssembledContext:
    prompt_block: str
    evidence: tuple[EvidenceBlock, ...]


def render_block(block: EvidenceBlock) -> str:
    return f"[{block.citation_index}] ({block.source})\n{block.chunk.text}"


def assemble(chunks: Sequence[Chunk]) -> AssembledContext:
    """Number chunks 1..N in input order and render them as citation blocks."""
    evidence = tuple(EvidenceBlock(citation_index=i, chunk=c) for i, c in enumerate(chunks, 1))
    prompt_block = "\n\n".join(render_block(b) for b in evidence)
    return AssembledContext(prompt_block=prompt_block, evidence=evidence)
