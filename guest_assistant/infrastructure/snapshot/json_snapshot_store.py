from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from guest_assistant.application.ports.snapshot_port import SnapshotStorePort
from guest_assistant.domain.errors import SnapshotError
from guest_assistant.domain.models import Chunk, SnapshotRecord


def _record_text(raw: dict[str, Any]) -> str:
    # "pageContent" is the key older snapshots were written with
    text = raw.get("text", raw.get("pageContent"))
    if not isinstance(text, str):
        raise SnapshotError("snapshot record is missing a 'text' string")
    return text


@dataclass
class JsonSnapshotStore(SnapshotStorePort):
    """Snapshot as a JSON array of {"text": ..., "metadata": {"source": ...}}."""

    path: str = "index.json"

    def load(self) -> list[Chunk]:
        if not os.path.exists(self.path):
            raise SnapshotError(f"{self.path} not found - run ingest first.")
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as ex:
            raise SnapshotError(f"Failed to read snapshot '{self.path}': {ex}") from ex

        if not isinstance(data, list):
            raise SnapshotError("snapshot must be a JSON array of records")

        chunks: list[Chunk] = []
        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise SnapshotError(f"snapshot record {i} is not an object")
            metadata = raw.get("metadata") or {}
            if not isinstance(metadata, dict):
                raise SnapshotError(f"snapshot record {i} has non-object metadata")
            chunks.append(Chunk(id=i, text=_record_text(raw), metadata=metadata))
        return chunks

    def save(self, records: Sequence[SnapshotRecord]) -> int:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
        except OSError as ex:
            raise SnapshotError(f"Failed to write snapshot '{self.path}': {ex}") from ex
        return len(records)
