"""Abstract interface for embedding providers."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Port for turning one text into one embedding vector."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: The text to embed.

        Returns:
            The embedding vector, verbatim as the model produced it.

        Raises:
            EmbeddingServiceError: If the provider call fails.
        """
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Dimensionality of the vectors produced by this provider."""
        ...

    def close(self) -> None:
        """Release any held resources."""
