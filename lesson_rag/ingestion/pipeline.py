"""Ingestion pipeline: clear, split, embed and store a document's chunks."""

import logging
from enum import Enum

from lesson_rag.embedding.embedder import Embedder
from lesson_rag.errors import EmbeddingServiceError, StoreError
from lesson_rag.ingestion.chunker import TextChunker
from lesson_rag.ingestion.locks import DocumentLocks
from lesson_rag.models.chunk import Chunk
from lesson_rag.models.query_result import IngestionResult, IngestionStatus
from lesson_rag.storage.chunk_store import ChunkStore

logger = logging.getLogger(__name__)


class IngestionStage(str, Enum):
    CLEAR = "clear"
    SPLIT = "split"
    EMBED = "embed"
    STORE = "store"


class IngestionPipeline:
    """Turns document text into stored, embedded chunks with replace semantics.

    Each call runs CLEAR -> SPLIT -> EMBED -> STORE in order. Old chunks are
    cleared first, so a failed embed leaves the document with no chunks
    until ingestion is retried. Embedding and store failures are logged and
    reported in the result instead of raised. Calls for the same document
    are serialized.

    Args:
        store: Chunk store to write to.
        embedder: Embedder used for the chunk batch.
        chunker: Splits the document text.
        transactional: Insert all chunks of a document in one transaction
            instead of one row at a time.
    """

    def __init__(
        self,
        store: ChunkStore,
        embedder: Embedder,
        chunker: TextChunker,
        transactional: bool = False,
        locks: DocumentLocks | None = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._chunker = chunker
        self._transactional = transactional
        self._locks = locks or DocumentLocks()

    def ingest(self, document_id: str, text: str | None) -> IngestionResult:
        """Replace the stored chunks of a document with chunks of text.

        Returns:
            IngestionResult with the number of chunks committed.
        """
        with self._locks.hold(document_id):
            return self._run(document_id, text)

    def remove_document(self, document_id: str) -> int:
        """Delete every chunk of a document. Returns the number removed."""
        with self._locks.hold(document_id):
            return self._store.delete_by_document(document_id)

    def _run(self, document_id: str, text: str | None) -> IngestionResult:
        stage = IngestionStage.CLEAR
        try:
            self._store.delete_by_document(document_id)
        except StoreError as e:
            return self._failed(document_id, stage, IngestionStatus.STORE_FAILED, e, 0)

        stage = IngestionStage.SPLIT
        pieces = self._chunker.split(text)
        logger.info(
            "Ingesting document %s: %d characters, %d chunks",
            document_id,
            len(text or ""),
            len(pieces),
        )
        if not pieces:
            return IngestionResult(document_id=document_id, chunk_count=0)

        stage = IngestionStage.EMBED
        try:
            vectors = self._embedder.embed_batch(pieces)
        except EmbeddingServiceError as e:
            return self._failed(document_id, stage, IngestionStatus.EMBEDDING_FAILED, e, 0)

        stage = IngestionStage.STORE
        chunks = [
            Chunk(document_id=document_id, content=piece, embedding=vector, sequence_index=i)
            for i, (piece, vector) in enumerate(zip(pieces, vectors))
        ]

        if self._transactional:
            try:
                self._store.insert_many(chunks)
            except StoreError as e:
                return self._failed(document_id, stage, IngestionStatus.STORE_FAILED, e, 0)
        else:
            for committed, chunk in enumerate(chunks):
                try:
                    self._store.insert(chunk)
                except StoreError as e:
                    return self._failed(
                        document_id, stage, IngestionStatus.STORE_FAILED, e, committed
                    )

        logger.info("Stored %d chunks for document %s", len(chunks), document_id)
        return IngestionResult(document_id=document_id, chunk_count=len(chunks))

    def _failed(
        self,
        document_id: str,
        stage: IngestionStage,
        status: IngestionStatus,
        error: Exception,
        committed: int,
    ) -> IngestionResult:
        logger.warning(
            "Ingestion of document %s failed at %s stage (%d chunks committed): %s",
            document_id,
            stage.value,
            committed,
            error,
        )
        return IngestionResult(
            document_id=document_id,
            chunk_count=committed,
            status=status,
            error=str(error),
        )
