"""Fixed-size sliding window chunker for lesson text."""

import logging
import math

from lesson_rag.config import ChunkingConfig
from lesson_rag.errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_chunking(chunk_size: int, overlap: int) -> None:
    """Reject chunking parameters that would not make forward progress.

    Raises:
        ConfigurationError: If chunk_size <= 0, overlap < 0 or
            overlap >= chunk_size.
    """
    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0:
        raise ConfigurationError(f"overlap must not be negative, got {overlap}")
    if overlap >= chunk_size:
        raise ConfigurationError(
            f"overlap ({overlap}) must be less than chunk_size ({chunk_size})"
        )


def split_text(text: str | None, chunk_size: int = 500, overlap: int = 50) -> list[str]:
    """Split text into overlapping windows of at most chunk_size characters.

    Windows start at offsets 0, step, 2*step, ... where
    ``step = chunk_size - overlap``. Splitting stops at the first window
    that reaches the end of the text, so consecutive chunks share exactly
    ``overlap`` characters and only the last one may be shorter.

    Args:
        text: The text to split. Empty or None yields no chunks.
        chunk_size: Maximum characters per chunk.
        overlap: Characters shared by consecutive chunks.

    Returns:
        Chunks in document order.

    Raises:
        ConfigurationError: If the parameters are invalid.
    """
    validate_chunking(chunk_size, overlap)

    if not text:
        return []

    chunks: list[str] = []
    step = chunk_size - overlap
    start = 0

    while start < len(text):
        end = min(start + chunk_size, len(text))
        chunks.append(text[start:end])

        if end == len(text):
            break
        start += step

    return chunks


class TextChunker:
    """Splits document text using the configured window size and overlap.

    Args:
        config: ChunkingConfig with chunk_size and overlap.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """

    def __init__(self, config: ChunkingConfig) -> None:
        validate_chunking(config.chunk_size, config.overlap)
        self._config = config

    @property
    def chunk_size(self) -> int:
        return self._config.chunk_size

    @property
    def overlap(self) -> int:
        return self._config.overlap

    def split(self, text: str | None) -> list[str]:
        chunks = split_text(text, self._config.chunk_size, self._config.overlap)
        logger.debug(
            "Split %d characters into %d chunks", len(text or ""), len(chunks)
        )
        return chunks

    def max_chunks(self, text_length: int) -> int:
        """Upper bound on the number of chunks for a text of this length."""
        if text_length <= 0:
            return 0
        return math.ceil(text_length / (self._config.chunk_size - self._config.overlap))
