from collections.abc import Sequence
from typing import Protocol

from guest_assistant.domain.models import Chunk, SnapshotRecord


class SnapshotStorePort(Protocol):
    """Flat (text, metadata) snapshot; vectors are never persisted."""

    def load(self) -> list[Chunk]: ...

    def save(self, records: Sequence[SnapshotRecord]) -> int: ...
