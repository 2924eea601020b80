"""Embedding providers and the batching embedder."""

from lesson_rag.embedding.embedder import Embedder
from lesson_rag.embedding.huggingface import HuggingFaceEmbeddingProvider
from lesson_rag.embedding.provider import EmbeddingProvider

__all__ = ["Embedder", "EmbeddingProvider", "HuggingFaceEmbeddingProvider"]
