#!/usr/bin/env python3
"""
Scholarship Embedding Store - Interface for persisting scholarship embeddings.

The store is a mapping keyed by scholarship id: ``put`` replaces any
existing record for the same id. Implementations raise
StoreUnavailableError when the backing storage cannot be used.
"""
import json
import logging
import os
import tempfile
import threading
from typing import Protocol, runtime_checkable, List, Dict, Optional

from core.exceptions import StoreUnavailableError
from core.matcher.models import EmbeddingRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbeddingStore(Protocol):
    """Protocol for storing scholarship embeddings."""

    def get(self, scholarship_id: str) -> Optional[EmbeddingRecord]:
        """Return the record for a scholarship, or None if absent."""
        ...

    def put(self, record: EmbeddingRecord) -> None:
        """Insert or replace the record keyed by ``record.id``."""
        ...

    def delete(self, scholarship_id: str) -> bool:
        """Delete the record for a scholarship. Returns False if it was absent."""
        ...

    def list_all(self) -> List[EmbeddingRecord]:
        """Return every stored record."""
        ...


class InMemoryEmbeddingStore:
    """In-memory implementation of embedding store for testing."""

    def __init__(self, records: Optional[List[EmbeddingRecord]] = None):
        self._storage: Dict[str, EmbeddingRecord] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self._storage[record.id] = record

    def get(self, scholarship_id: str) -> Optional[EmbeddingRecord]:
        with self._lock:
            return self._storage.get(scholarship_id)

    def put(self, record: EmbeddingRecord) -> None:
        with self._lock:
            self._storage[record.id] = record

    def delete(self, scholarship_id: str) -> bool:
        with self._lock:
            return self._storage.pop(scholarship_id, None) is not None

    def list_all(self) -> List[EmbeddingRecord]:
        with self._lock:
            return list(self._storage.values())

    def clear(self) -> None:
        """Clear all stored data."""
        with self._lock:
            self._storage.clear()


class JsonFileEmbeddingStore:
    """
    Embedding store backed by a single JSON file (a list of records).

    The whole file is read on each operation and rewritten atomically on
    changes, which is fine for catalogs of a few thousand scholarships.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, EmbeddingRecord]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            records = [EmbeddingRecord.from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreUnavailableError(f"Cannot read embeddings file {self.file_path}: {e}") from e
        return {record.id: record for record in records}

    def _save(self, records: Dict[str, EmbeddingRecord]) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump([r.to_dict() for r in records.values()], f, indent=2)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write embeddings file {self.file_path}: {e}") from e

    def get(self, scholarship_id: str) -> Optional[EmbeddingRecord]:
        with self._lock:
            return self._load().get(scholarship_id)

    def put(self, record: EmbeddingRecord) -> None:
        with self._lock:
            records = self._load()
            records[record.id] = record
            self._save(records)
        logger.debug(f"Saved embedding for scholarship {record.id} to {self.file_path}")

    def delete(self, scholarship_id: str) -> bool:
        with self._lock:
            records = self._load()
            if records.pop(scholarship_id, None) is None:
                return False
            self._save(records)
        return True

    def list_all(self) -> List[EmbeddingRecord]:
        with self._lock:
            return list(self._load().values())
