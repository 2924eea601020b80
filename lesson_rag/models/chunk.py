"""Chunk data model."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """One contiguous slice of a document's text with its embedding.

    A chunk cannot exist without an embedding, so anything that reaches
    the store is queryable.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    content: str = Field(min_length=1)
    embedding: list[float] = Field(min_length=1)
    sequence_index: int = 0  # Left-to-right position within one ingestion
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def dimensions(self) -> int:
        return len(self.embedding)
