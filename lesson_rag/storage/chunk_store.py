"""SQLite-backed chunk store with cosine similarity search."""

import json
import logging
import sqlite3
from pathlib import Path

from lesson_rag.errors import DimensionMismatchError, StoreError
from lesson_rag.models.chunk import Chunk
from lesson_rag.models.query_result import RetrievalResult
from lesson_rag.storage.database import get_connection

logger = logging.getLogger(__name__)

_CHUNK_COLUMNS = "id, document_id, content, embedding, sequence_index, created_at"


class ChunkStore:
    """Persists embedded chunks and ranks them against a query vector.

    Every operation opens its own connection, so a store can be shared
    between threads. WAL mode lets searches run while another document
    is being written. All values, including serialized vectors, are bound
    as parameters.

    Args:
        db_path: Path to an initialized SQLite database.
        timeout_seconds: Seconds to wait for a locked database.
    """

    def __init__(self, db_path: str | Path, timeout_seconds: float = 5.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = timeout_seconds

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_connection(self._db_path, timeout=self._timeout)
        except sqlite3.Error as e:
            raise StoreError(f"Could not open chunk store {self._db_path}: {e}") from e

    def insert(self, chunk: Chunk) -> None:
        """Append one chunk. Duplicate content is not checked."""
        self.insert_many([chunk])

    def insert_many(self, chunks: list[Chunk]) -> None:
        """Insert chunks in a single transaction: either all rows land or none."""
        if not chunks:
            return

        rows = [_to_row(chunk) for chunk in chunks]
        conn = self._connect()
        try:
            with conn:
                conn.executemany(
                    f"INSERT INTO lesson_chunks ({_CHUNK_COLUMNS}, dimensions) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to insert {len(rows)} chunk(s): {e}") from e
        finally:
            conn.close()

    def delete_by_document(self, document_id: str) -> int:
        """Delete every chunk of a document.

        Returns:
            Number of chunks deleted (0 when there were none).
        """
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM lesson_chunks WHERE document_id = ?", (document_id,)
                )
            count = cursor.rowcount
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete chunks for {document_id}: {e}") from e
        finally:
            conn.close()

        if count > 0:
            logger.info("Deleted %d chunks for document %s", count, document_id)
        return count

    def nearest_neighbors(
        self,
        query_vector: list[float],
        document_id: str | None = None,
        k: int = 3,
    ) -> list[RetrievalResult]:
        """Rank chunks by cosine similarity to query_vector, best first.

        Args:
            query_vector: The query embedding.
            document_id: Restrict ranking to one document's chunks.
            k: Maximum number of results.

        Returns:
            Up to k results, sorted by descending similarity. Ties keep
            insertion order.

        Raises:
            ValueError: If k is not positive.
            DimensionMismatchError: If any chunk in scope has a different
                dimension than query_vector.
            StoreError: If the database operation fails.
        """
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")

        scope_sql = ""
        scope_params: tuple[str, ...] = ()
        if document_id is not None:
            scope_sql = "WHERE document_id = ?"
            scope_params = (document_id,)

        conn = self._connect()
        try:
            stored_dims = [
                row[0]
                for row in conn.execute(
                    f"SELECT DISTINCT dimensions FROM lesson_chunks {scope_sql}",
                    scope_params,
                )
            ]
            for dims in stored_dims:
                if dims != len(query_vector):
                    raise DimensionMismatchError(expected=dims, actual=len(query_vector))

            if not stored_dims:
                return []

            rows = conn.execute(
                f"SELECT {_CHUNK_COLUMNS}, "
                "cosine_similarity(embedding, ?) AS similarity "
                f"FROM lesson_chunks {scope_sql} "
                "ORDER BY similarity DESC, rowid ASC LIMIT ?",
                (json.dumps(query_vector), *scope_params, k),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Similarity search failed: {e}") from e
        finally:
            conn.close()

        return [
            RetrievalResult(chunk=_from_row(row), similarity_score=row["similarity"])
            for row in rows
        ]

    def count(self, document_id: str | None = None) -> int:
        """Number of stored chunks, optionally for one document."""
        conn = self._connect()
        try:
            if document_id is None:
                row = conn.execute("SELECT COUNT(*) FROM lesson_chunks").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) FROM lesson_chunks WHERE document_id = ?",
                    (document_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to count chunks: {e}") from e
        finally:
            conn.close()
        return row[0]

    def list_chunks(self, document_id: str) -> list[Chunk]:
        """All chunks of a document in sequence order."""
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM lesson_chunks "
                "WHERE document_id = ? ORDER BY sequence_index, rowid",
                (document_id,),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list chunks for {document_id}: {e}") from e
        finally:
            conn.close()
        return [_from_row(row) for row in rows]


def _to_row(chunk: Chunk) -> tuple:
    return (
        chunk.id,
        chunk.document_id,
        chunk.content,
        json.dumps(chunk.embedding),
        chunk.sequence_index,
        chunk.created_at.isoformat(),
        chunk.dimensions,
    )


def _from_row(row: sqlite3.Row) -> Chunk:
    return Chunk(
        id=row["id"],
        document_id=row["document_id"],
        content=row["content"],
        embedding=json.loads(row["embedding"]),
        sequence_index=row["sequence_index"],
        created_at=row["created_at"],
    )
