"""Single and batched embedding on top of an EmbeddingProvider."""

import logging
from concurrent.futures import ThreadPoolExecutor

from lesson_rag.embedding.provider import EmbeddingProvider
from lesson_rag.errors import ConfigurationError, EmbeddingServiceError

logger = logging.getLogger(__name__)


class Embedder:
    """Maps texts to vectors through an injected provider.

    Batches fan out over a thread pool. Results keep input order, and a
    single failed text fails the whole batch. Nothing is cached.

    Args:
        provider: The embedding provider to call.
        max_workers: Maximum concurrent provider calls per batch.
    """

    def __init__(self, provider: EmbeddingProvider, max_workers: int = 8) -> None:
        if max_workers <= 0:
            raise ConfigurationError(f"max_workers must be positive, got {max_workers}")
        self._provider = provider
        self._max_workers = max_workers

    @property
    def dimensions(self) -> int:
        return self._provider.dimensions

    def embed_one(self, text: str) -> list[float]:
        """Embed one text.

        Raises:
            EmbeddingServiceError: If the provider fails for any reason or
                returns a vector that is empty or not of the provider's dimension.
        """
        try:
            vector = self._provider.embed(text)
        except EmbeddingServiceError:
            raise
        except Exception as e:
            raise EmbeddingServiceError(f"Embedding provider failed: {e}") from e

        if not vector or len(vector) != self._provider.dimensions:
            raise EmbeddingServiceError(
                f"Malformed embedding: expected {self._provider.dimensions} dimensions, "
                f"got {len(vector or [])}"
            )
        return vector

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts, returning one vector per text in the same order.

        Raises:
            EmbeddingServiceError: If any text fails. No partial list is returned.
        """
        if not texts:
            return []

        if len(texts) == 1 or self._max_workers == 1:
            vectors = [self.embed_one(text) for text in texts]
        else:
            workers = min(self._max_workers, len(texts))
            executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="embed")
            try:
                vectors = list(executor.map(self.embed_one, texts))
            except EmbeddingServiceError:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            executor.shutdown(wait=True)

        logger.info("Generated %d embeddings (dims=%d)", len(vectors), len(vectors[0]))
        return vectors
