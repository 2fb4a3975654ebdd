from __future__ import annotations

import glob
import os
from collections.abc import Sequence
from dataclasses import dataclass

from guest_assistant.application.ports.document_loader_port import (
    DocumentLoaderPort,
    DocumentPayload,
)
from guest_assistant.domain.errors import DocumentError


def _load_pdf(path: str) -> DocumentPayload:
    try:
        from pypdf import PdfReader  # lazy import to avoid hard dependency in tests
    except Exception as ex:  # pragma: no cover
        raise DocumentError("pypdf is not installed") from ex

    try:
        reader = PdfReader(path)
        pages = [p.extract_text() or "" for p in reader.pages]
        title = reader.metadata.title if getattr(reader, "metadata", None) else None
        return DocumentPayload(text="\n\n".join(pages).strip(), source_path=path, title=title)
    except Exception as ex:  # noqa: BLE001
        raise DocumentError(f"PDF parse failed: {ex}") from ex


@dataclass
class CorpusFileLoader(DocumentLoaderPort):
    """Reads plain-text files (and PDFs when pypdf is installed) from the corpus folder."""

    encoding: str = "utf-8"

    def load(self, path: str) -> DocumentPayload:
        if path.lower().endswith(".pdf"):
            return _load_pdf(path)
        try:
            with open(path, encoding=self.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as ex:
            raise DocumentError(f"TXT load failed: {ex}") from ex
        return DocumentPayload(text=text, source_path=path)

    def load_dir(self, path: str, patterns: Sequence[str] = ("*.txt",)) -> list[DocumentPayload]:
        if not os.path.isdir(path):
            raise DocumentError(f"Corpus folder '{path}' does not exist.")
        files: set[str] = set()
        for pattern in patterns:
            files.update(glob.glob(os.path.join(path, pattern)))
        return [self.load(f) for f in sorted(files) if os.path.isfile(f)]
