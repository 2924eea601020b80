"""Tests for data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from lesson_rag.models import (
    Chunk,
    Document,
    IngestionResult,
    IngestionStatus,
    RetrievalResult,
)


class TestChunk:
    def test_create_chunk(self) -> None:
        chunk = Chunk(document_id="lesson-1", content="Photosynthesis", embedding=[0.1, 0.2])
        assert chunk.document_id == "lesson-1"
        assert chunk.dimensions == 2
        assert chunk.sequence_index == 0
        assert chunk.id  # UUID auto-generated
        assert isinstance(chunk.created_at, datetime)

    def test_ids_are_unique(self) -> None:
        a = Chunk(document_id="d", content="x", embedding=[1.0])
        b = Chunk(document_id="d", content="x", embedding=[1.0])
        assert a.id != b.id

    def test_chunk_without_embedding_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Chunk(document_id="d", content="text", embedding=[])

    def test_empty_content_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Chunk(document_id="d", content="", embedding=[1.0])

    def test_chunk_serialization(self) -> None:
        chunk = Chunk(document_id="d", content="text", embedding=[1.0, 2.0], sequence_index=4)
        restored = Chunk(**chunk.model_dump())
        assert restored == chunk


class TestDocument:
    def test_document_defaults(self) -> None:
        document = Document(id="lesson-1")
        assert document.text == ""
        assert document.title == ""


class TestRetrievalResult:
    def test_create_retrieval_result(self) -> None:
        chunk = Chunk(document_id="d", content="sample", embedding=[1.0])
        result = RetrievalResult(chunk=chunk, similarity_score=0.85)
        assert result.similarity_score == 0.85
        assert result.chunk.content == "sample"


class TestIngestionResult:
    def test_defaults_to_success(self) -> None:
        result = IngestionResult(document_id="d")
        assert result.succeeded
        assert result.chunk_count == 0
        assert result.error is None

    def test_failure_status(self) -> None:
        result = IngestionResult(
            document_id="d",
            status=IngestionStatus.EMBEDDING_FAILED,
            error="timeout",
        )
        assert not result.succeeded
        assert result.model_dump()["status"] == IngestionStatus.EMBEDDING_FAILED
