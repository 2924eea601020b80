"""Per-document mutual exclusion for ingestion."""

import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager


class DocumentLocks:
    """A registry of one lock per document id.

    Serializes work on the same document while different documents
    proceed in parallel. Entries are weakly referenced, so a lock is
    dropped once nobody holds or waits on it.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._locks)

    def get(self, document_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(document_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[document_id] = lock
            return lock

    @contextmanager
    def hold(self, document_id: str) -> Iterator[None]:
        lock = self.get(document_id)
        with lock:
            yield
