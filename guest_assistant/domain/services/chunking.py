from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# ---------- Value Objects ----------


@dataclass(frozen=True)
class ChunkingParams:
    chunk_size: int = 500
    chunk_overlap: int = 50
    separators: tuple[str, ...] = ("\n\n", "\n", ". ", " ", "")

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if not (0 <= self.chunk_overlap < self.chunk_size):
            raise ValueError("chunk_overlap must be >= 0 and < chunk_size")


# ---------- Splitting ----------


def _split_keep_separator(text: str, sep: str) -> list[str]:
    parts = text.split(sep)
    # keep the separator on the left piece so sentences keep their full stop
    return [p + sep for p in parts[:-1]] + [parts[-1]]


def _split_recursive(text: str, separators: Sequence[str], size: int) -> list[str]:
    if len(text) <= size:
        return [text]

    sep = ""
    rest: Sequence[str] = ()
    for i, candidate in enumerate(separators):
        if candidate == "" or candidate in text:
            sep, rest = candidate, separators[i + 1 :]
            break

    if sep == "":
        return [text[i : i + size] for i in range(0, len(text), size)]

    pieces: list[str] = []
    for part in _split_keep_separator(text, sep):
        if not part:
            continue
        if len(part) <= size:
            pieces.append(part)
        else:
            pieces.extend(_split_recursive(part, rest, size))
    return pieces


def _merge_pieces(pieces: Sequence[str], p: ChunkingParams) -> list[str]:
    """Pack pieces into chunks of at most chunk_size, carrying up to chunk_overlap chars."""
    chunks: list[str] = []
    window: list[str] = []
    window_len = 0

    for piece in pieces:
        if window and window_len + len(piece) > p.chunk_size:
            text = "".join(window).strip()
            if text:
                chunks.append(text)
            # drop from the front until what remains fits the overlap budget
            while window and (
                window_len > p.chunk_overlap or window_len + len(piece) > p.chunk_size
            ):
                window_len -= len(window[0])
                window.pop(0)
        window.append(piece)
        window_len += len(piece)

    text = "".join(window).strip()
    if text:
        chunks.append(text)
    return chunks


def split_text(text: str, params: ChunkingParams | None = None) -> list[str]:
    """Recursive character splitting: paragraph → line → sentence → word → character."""
    p = params or ChunkingParams()
    if not text.strip():
        return []
    pieces = _split_recursive(text.strip(), p.separators, p.chunk_size)
    return _merge_pieces(pieces, p)


# Eigenschaften:
#
# - Kein I/O, keine Globals, keine externen NLP-Libs.
# - Jeder Chunk ist höchstens chunk_size Zeichen lang.
# - Nachbarn teilen sich bis zu chunk_overlap Zeichen.
