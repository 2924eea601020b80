"""Exception types raised by the lesson RAG core."""


class LessonRagError(Exception):
    """Base class for all lesson RAG errors."""


class ConfigurationError(LessonRagError):
    """Invalid chunking or service parameters. Raised before any I/O."""


class EmbeddingServiceError(LessonRagError):
    """The embedding provider failed, timed out, or returned malformed output."""


class DimensionMismatchError(LessonRagError):
    """A query vector and the stored vectors have different lengths.

    Usually means the embedding model changed without re-ingesting.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Vector dimension mismatch: stored chunks have {expected} "
            f"dimensions, query vector has {actual}"
        )
        self.expected = expected
        self.actual = actual


class StoreError(LessonRagError):
    """A chunk store operation failed."""
