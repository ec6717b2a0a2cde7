"""
Text chunking task.

Splits text into fixed-size, overlapping character windows. Consecutive
chunks share exactly `chunk_overlap` characters, and every character of the
input lands in at least one chunk. Optionally the cut point moves back to
the last sentence end inside the overlap window.

Dependencies: agent_rag.core.document_processing.models
System role: First stage of document ingestion pipeline
"""

from agent_rag.core.document_processing.models.chunk import Chunk
from agent_rag.core.exceptions import ConfigError

SENTENCE_ENDINGS = ".?!"


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ConfigError("Chunk size must be positive", field="chunk_size")
    if chunk_overlap < 0:
        raise ConfigError("Chunk overlap cannot be negative", field="chunk_overlap")
    if chunk_overlap >= chunk_size:
        raise ConfigError(
            f"Chunk overlap ({chunk_overlap}) must be smaller than chunk size ({chunk_size})",
            field="chunk_overlap",
        )


def _sentence_cut(text: str, start: int, end: int, overlap: int) -> int:
    """Cut just after the last sentence end in the overlap window, else at `end`."""
    window_start = end - overlap
    window = text[window_start:end]
    last = max(window.rfind(mark) for mark in SENTENCE_ENDINGS)
    if last == -1:
        return end
    cut = window_start + last + 1
    # The next chunk must still start after this one
    if cut - overlap <= start:
        return end
    return cut


def chunk_text(
    text: str,
    chunk_size: int,
    chunk_overlap: int,
    respect_sentences: bool = False,
) -> list[str]:
    """
    Split text into overlapping chunks.

    Args:
        text: Text to split
        chunk_size: Maximum chunk length in characters
        chunk_overlap: Characters shared by consecutive chunks
        respect_sentences: Prefer cutting after a sentence end

    Returns:
        list[str]: Chunks in order; empty for empty text

    Raises:
        ConfigError: If chunk_size <= 0, chunk_overlap < 0 or chunk_overlap >= chunk_size
    """
    _validate(chunk_size, chunk_overlap)
    length = len(text)
    chunks: list[str] = []
    start = 0
    while start < length:
        end = min(start + chunk_size, length)
        if end == length:
            chunks.append(text[start:end])
            break
        cut = _sentence_cut(text, start, end, chunk_overlap) if respect_sentences else end
        chunks.append(text[start:cut])
        start = cut - chunk_overlap
    return chunks


class Chunker:
    """Split document text into owner/source tagged chunks."""

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 50,
        respect_sentences: bool = False,
    ) -> None:
        """
        Initialize chunker with window configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            respect_sentences: Prefer cutting after the last sentence end in the overlap window

        Raises:
            ConfigError: If the window configuration is invalid
        """
        _validate(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.respect_sentences = respect_sentences

    def split(self, text: str) -> list[str]:
        return chunk_text(text, self.chunk_size, self.chunk_overlap, self.respect_sentences)

    def chunk(self, text: str, owner_id: str, source_id: str) -> list[Chunk]:
        """
        Split text into chunks tagged with owner, source and index.

        Args:
            text: Document content
            owner_id: Owner the chunks belong to
            source_id: Source document identifier

        Returns:
            list[Chunk]: Chunks with sequential indices starting at 0
        """
        return [
            Chunk(owner_id=owner_id, source_id=source_id, index=index, text=piece)
            for index, piece in enumerate(self.split(text))
        ]
