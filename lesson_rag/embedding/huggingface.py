"""Hugging Face Inference feature-extraction embedding provider."""

import logging
from typing import Any

import httpx

from lesson_rag.config import EmbeddingConfig
from lesson_rag.embedding.provider import EmbeddingProvider
from lesson_rag.errors import EmbeddingServiceError

logger = logging.getLogger(__name__)


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """Generates embeddings through the Hugging Face feature-extraction pipeline.

    The httpx client is thread-safe, so one provider can be shared across
    concurrent requests and batch workers.
    """

    def __init__(
        self,
        api_key: str | None,
        config: EmbeddingConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or EmbeddingConfig()
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self._config.timeout_seconds)

    @property
    def dimensions(self) -> int:
        return self._config.dimensions

    @property
    def url(self) -> str:
        base = self._config.provider_url.rstrip("/")
        return f"{base}/{self._config.model}/pipeline/feature-extraction"

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def embed(self, text: str) -> list[float]:
        try:
            response = self._client.post(
                self.url,
                headers=self._get_headers(),
                json={"inputs": text},
                timeout=self._config.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise EmbeddingServiceError(
                f"Embedding request timed out after {self._config.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            raise EmbeddingServiceError(f"Embedding request failed: {e}") from e

        if response.status_code != 200:
            error_text = response.text[:500]
            logger.error("Embedding API error %d: %s", response.status_code, error_text)
            raise EmbeddingServiceError(
                f"Embedding API returned {response.status_code}: {error_text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EmbeddingServiceError("Embedding API returned invalid JSON") from e

        return _parse_vector(data)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HuggingFaceEmbeddingProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _parse_vector(data: Any) -> list[float]:
    """Extract a flat vector from a feature-extraction response.

    Sentence-transformers models return a flat list of floats; some
    deployments wrap it in a single-row list.
    """
    if isinstance(data, list) and len(data) == 1 and isinstance(data[0], list):
        data = data[0]

    if not isinstance(data, list) or not data:
        raise EmbeddingServiceError(
            f"Malformed embedding response: expected a list of numbers, got {type(data).__name__}"
        )

    vector: list[float] = []
    for value in data:
        # bool is an int subclass but never a valid component
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EmbeddingServiceError(
                "Malformed embedding response: vector contains non-numeric values"
            )
        vector.append(float(value))
    return vector
