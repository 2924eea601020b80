"""Data models for the lesson RAG core."""

from lesson_rag.models.chunk import Chunk
from lesson_rag.models.document import Document
from lesson_rag.models.query_result import (
    IngestionResult,
    IngestionStatus,
    RetrievalResult,
)

__all__ = [
    "Chunk",
    "Document",
    "IngestionResult",
    "IngestionStatus",
    "RetrievalResult",
]
