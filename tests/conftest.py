"""Shared fixtures: a temporary chunk store and deterministic embedders."""

from pathlib import Path

import pytest

from lesson_rag.embedding.embedder import Embedder
from lesson_rag.embedding.provider import EmbeddingProvider
from lesson_rag.errors import EmbeddingServiceError
from lesson_rag.storage.chunk_store import ChunkStore
from lesson_rag.storage.database import initialize_database


class StubProvider(EmbeddingProvider):
    """Returns hand-crafted vectors for known texts, a letter histogram otherwise."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        fail_on: set[str] | None = None,
        fail_all: bool = False,
        dimensions: int = 3,
    ) -> None:
        self.vectors = vectors or {}
        self.fail_on = fail_on or set()
        self.fail_all = fail_all
        self._dimensions = dimensions
        self.calls: list[str] = []

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_all or text in self.fail_on:
            raise EmbeddingServiceError(f"provider unavailable for {text!r}")
        if text in self.vectors:
            return self.vectors[text]
        lowered = text.lower()
        return [
            float(lowered.count("a")) + 1.0,
            float(lowered.count("e")),
            float(len(text)),
        ]


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "chunks.db"
    initialize_database(path)
    return path


@pytest.fixture
def store(db_path: Path) -> ChunkStore:
    return ChunkStore(db_path)


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def embedder(provider: StubProvider) -> Embedder:
    return Embedder(provider, max_workers=4)
