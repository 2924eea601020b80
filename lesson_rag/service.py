"""Lesson RAG facade for the surrounding application's lifecycle events."""

import logging

from lesson_rag.config import AppConfig
from lesson_rag.embedding.embedder import Embedder
from lesson_rag.embedding.huggingface import HuggingFaceEmbeddingProvider
from lesson_rag.embedding.provider import EmbeddingProvider
from lesson_rag.errors import StoreError
from lesson_rag.ingestion.chunker import TextChunker
from lesson_rag.ingestion.pipeline import IngestionPipeline
from lesson_rag.models.document import Document
from lesson_rag.models.query_result import IngestionResult
from lesson_rag.retrieval.service import RetrievalService
from lesson_rag.storage.chunk_store import ChunkStore
from lesson_rag.storage.database import initialize_database

logger = logging.getLogger(__name__)


class LessonRagService:
    """Entry points called by the lesson portal.

    Document creation, re-ingestion and deletion never fail because of
    grounding data, and neither does the tutor conversation.
    """

    def __init__(
        self,
        pipeline: IngestionPipeline,
        retrieval: RetrievalService,
        provider: EmbeddingProvider | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._retrieval = retrieval
        self._provider = provider

    @property
    def retrieval(self) -> RetrievalService:
        return self._retrieval

    def on_document_created(self, document: Document) -> IngestionResult:
        return self._pipeline.ingest(document.id, document.text)

    def reingest(self, document_id: str, text: str) -> IngestionResult:
        return self._pipeline.ingest(document_id, text)

    def on_document_deleted(self, document_id: str) -> int:
        """Drop a deleted document's chunks. Store failures are logged, not raised."""
        try:
            return self._pipeline.remove_document(document_id)
        except StoreError:
            logger.exception("Failed to remove chunks for deleted document %s", document_id)
            return 0

    def grounding_context(self, message: str, document_id: str | None = None) -> str:
        return self._retrieval.retrieve_context(message, document_id=document_id)

    def close(self) -> None:
        if self._provider is not None:
            self._provider.close()


def build_service(
    config: AppConfig,
    provider: EmbeddingProvider | None = None,
) -> LessonRagService:
    """Wire up a LessonRagService from configuration.

    Args:
        config: Application configuration.
        provider: Embedding provider to use instead of the Hugging Face one.

    Raises:
        ConfigurationError: If the chunking or embedding settings are invalid.
    """
    chunker = TextChunker(config.chunking)
    initialize_database(config.storage.sqlite_path)
    store = ChunkStore(config.storage.sqlite_path, timeout_seconds=config.storage.timeout_seconds)

    if provider is None:
        provider = HuggingFaceEmbeddingProvider(config.huggingface_api_key, config.embedding)
    embedder = Embedder(provider, max_workers=config.embedding.max_workers)

    pipeline = IngestionPipeline(
        store=store,
        embedder=embedder,
        chunker=chunker,
        transactional=config.ingestion.transactional,
    )
    retrieval = RetrievalService(embedder=embedder, store=store, config=config.retrieval)
    return LessonRagService(pipeline=pipeline, retrieval=retrieval, provider=provider)
