"""
In-memory score storage.

Used when Supabase is not configured and in tests. Rows are lost when the
process ends.
"""

import threading
import uuid
from typing import Any, Dict, List

from idea_oracle.storage.base import InsertResult, ScoreStorage


class MockScoreStorage(ScoreStorage):
    """In-memory mock storage for testing and development."""

    def __init__(self):
        self._records: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "mock"

    def insert_score(self, record: Dict[str, Any]) -> InsertResult:
        """Store a copy of the row with a generated id."""
        stored = dict(record)
        stored.setdefault("id", str(uuid.uuid4()))
        with self._lock:
            self._records.append(stored)
        return InsertResult(record_id=stored["id"], backend=self.name)

    @property
    def records(self) -> List[Dict[str, Any]]:
        """Copies of all stored rows, oldest first."""
        with self._lock:
            return [dict(r) for r in self._records]

    def clear(self) -> None:
        """Clear all records (for testing)."""
        with self._lock:
            self._records.clear()

    def count(self) -> int:
        """Return number of stored records (for testing)."""
        with self._lock:
            return len(self._records)
