"""Ingestion and retrieval result models."""

from enum import Enum

from pydantic import BaseModel

from lesson_rag.models.chunk import Chunk


class RetrievalResult(BaseModel):
    """A single retrieved chunk with its cosine similarity to the query."""

    chunk: Chunk
    similarity_score: float


class IngestionStatus(str, Enum):
    SUCCEEDED = "succeeded"
    EMBEDDING_FAILED = "embedding_failed"
    STORE_FAILED = "store_failed"


class IngestionResult(BaseModel):
    """Outcome of one ingestion call.

    ``chunk_count`` is the number of chunks committed to the store, which
    is lower than the number produced by the chunker when ingestion failed.
    """

    document_id: str
    chunk_count: int = 0
    status: IngestionStatus = IngestionStatus.SUCCEEDED
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is IngestionStatus.SUCCEEDED
