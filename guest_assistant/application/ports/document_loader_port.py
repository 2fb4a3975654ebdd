from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DocumentPayload:
    text: str
    source_path: str
    title: str | None = None


class DocumentLoaderPort(Protocol):
    def load(self, path: str) -> DocumentPayload: ...

    def load_dir(
        self, path: str, patterns: Sequence[str] = ("*.txt",)
    ) -> list[DocumentPayload]: ...
