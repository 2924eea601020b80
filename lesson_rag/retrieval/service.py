"""Query-time retrieval of grounding context for the lesson tutor."""

import logging

from lesson_rag.config import RetrievalConfig
from lesson_rag.embedding.embedder import Embedder
from lesson_rag.errors import EmbeddingServiceError, StoreError
from lesson_rag.models.query_result import RetrievalResult
from lesson_rag.storage.chunk_store import ChunkStore

logger = logging.getLogger(__name__)


def format_context(results: list[RetrievalResult], header: str) -> str:
    """Render retrieved chunks as a header followed by one bullet per chunk.

    Chunks keep the order they were given in. Returns an empty string
    when there are no results.
    """
    if not results:
        return ""
    bullets = "\n\n".join(f"- {r.chunk.content}" for r in results)
    return f"{header}\n\n{bullets}"


class RetrievalService:
    """Embeds queries and looks up the closest lesson chunks.

    Args:
        embedder: Embedder for query text.
        store: Chunk store to search.
        config: RetrievalConfig with top_k, search_limit and context_header.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: ChunkStore,
        config: RetrievalConfig | None = None,
    ) -> None:
        self._embedder = embedder
        self._store = store
        self._config = config or RetrievalConfig()

    def retrieve(
        self,
        query: str,
        document_id: str | None = None,
        k: int | None = None,
    ) -> list[RetrievalResult]:
        """Return the k chunks most similar to query, best first.

        Raises:
            EmbeddingServiceError: If the query cannot be embedded.
            DimensionMismatchError: If the query and stored vectors differ in length.
            StoreError: If the search fails.
        """
        query_vector = self._embedder.embed_one(query)
        return self._store.nearest_neighbors(
            query_vector,
            document_id=document_id,
            k=self._config.top_k if k is None else k,
        )

    def retrieve_context(
        self,
        query: str,
        document_id: str | None = None,
        k: int | None = None,
    ) -> str:
        """Build a grounding context string for a user message.

        Grounding is best-effort: embedding and store failures are logged
        and yield an empty string so the conversation can continue without
        it. A dimension mismatch is still raised.

        Args:
            query: The latest user message.
            document_id: The lesson to search within. None searches all lessons.
            k: Number of chunks. Defaults to RetrievalConfig.top_k.

        Returns:
            The formatted context, or "" when nothing relevant was found.
        """
        if not query or not query.strip():
            return ""

        try:
            results = self.retrieve(query, document_id=document_id, k=k)
        except (EmbeddingServiceError, StoreError):
            logger.exception("Retrieval failed for document %s", document_id)
            return ""

        if not results:
            logger.info("No chunks retrieved for document %s", document_id)
            return ""

        logger.info(
            "Retrieved %d chunks for document %s (best score %.3f)",
            len(results),
            document_id,
            results[0].similarity_score,
        )
        return format_context(results, self._config.context_header)

    def search(self, query: str, limit: int | None = None) -> list[RetrievalResult]:
        """Semantic search across every lesson's chunks.

        Errors propagate, unlike retrieve_context.
        """
        k = self._config.search_limit if limit is None else limit
        return self.retrieve(query, document_id=None, k=k)
