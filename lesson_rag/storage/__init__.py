"""SQLite persistence for embedded chunks."""

from lesson_rag.storage.chunk_store import ChunkStore
from lesson_rag.storage.database import cosine_similarity, get_connection, initialize_database

__all__ = ["ChunkStore", "cosine_similarity", "get_connection", "initialize_database"]
