"""SQLite database initialization and connection management."""

import json
import math
import sqlite3
from pathlib import Path


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine of the angle between two vectors. Zero vectors score 0.0."""
    if len(a) != len(b):
        raise ValueError(f"Vector dimensions don't match: {len(a)} vs {len(b)}")

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot / (norm_a * norm_b)


def _sql_cosine_similarity(stored: str, query: str) -> float:
    return cosine_similarity(json.loads(stored), json.loads(query))


def get_connection(db_path: str | Path, timeout: float = 5.0) -> sqlite3.Connection:
    """Create a connection to the SQLite database.

    Registers ``cosine_similarity(embedding, query)`` so ranking and the
    result limit run inside the query. Both arguments are JSON arrays.

    Args:
        db_path: Path to the SQLite database file.
        timeout: Seconds to wait for a locked database.

    Returns:
        A sqlite3 Connection with row_factory set to Row.
    """
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.create_function("cosine_similarity", 2, _sql_cosine_similarity, deterministic=True)
    return conn


def initialize_database(db_path: str | Path) -> None:
    """Create the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS lesson_chunks (
                id TEXT PRIMARY KEY,
                document_id TEXT NOT NULL,
                content TEXT NOT NULL CHECK (length(content) > 0),
                embedding TEXT NOT NULL,
                dimensions INTEGER NOT NULL CHECK (dimensions > 0),
                sequence_index INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS idx_lesson_chunks_document_id
                ON lesson_chunks (document_id);
            """
        )
        conn.commit()
    finally:
        conn.close()
