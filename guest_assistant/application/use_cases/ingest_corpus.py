from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from ...domain.errors import DocumentError, DomainError
from ...domain.models import SnapshotRecord
from ...domain.services.chunking import ChunkingParams, split_text
from ...domain.types import Result
from ..dto.ingest_dto import IngestCorpusRequest
from ..ports.document_loader_port import DocumentLoaderPort
from ..ports.snapshot_port import SnapshotStorePort

logger = logging.getLogger(__name__)


@dataclass
class IngestCorpus:
    """Offline batch job: raw files → chunks → flat (text, metadata) snapshot."""

    loader: DocumentLoaderPort
    snapshot_store: SnapshotStorePort

    def execute(self, req: IngestCorpusRequest) -> Result[int, DomainError]:
        # 1) Quellen laden
        try:
            params = ChunkingParams(chunk_size=req.chunk_size, chunk_overlap=req.chunk_overlap)
            docs = self.loader.load_dir(req.data_dir, req.patterns)
        except ValueError as ex:
            return Result.failure(DomainError(str(ex)))
        except DomainError as ex:
            return Result.failure(ex)

        if not docs:
            return Result.failure(
                DocumentError(f"No {', '.join(req.patterns)} files found in '{req.data_dir}'.")
            )
        logger.info("loaded %d document(s) from %s", len(docs), req.data_dir)

        # 2) Chunken (pure Domain), each chunk tagged with its file name
        records: list[SnapshotRecord] = []
        for doc in docs:
            source = os.path.basename(doc.source_path)
            for piece in split_text(doc.text, params):
                records.append(SnapshotRecord(text=piece, metadata={"source": source}))

        if not records:
            return Result.failure(DocumentError("corpus produced no chunks"))
        logger.info("split into %d chunk(s)", len(records))

        # 3) Snapshot schreiben
        try:
            written = self.snapshot_store.save(records)
        except DomainError as ex:
            return Result.failure(ex)
        return Result.success(written)
