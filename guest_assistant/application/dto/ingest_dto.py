from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IngestCorpusRequest:
    data_dir: str  # folder holding the raw corpus files
    patterns: tuple[str, ...] = field(default=("*.txt",))
    chunk_size: int = 500
    chunk_overlap: int = 50
