"""
Base storage abstraction for Idea Oracle.

Defines the write contract the scoring engine needs from persistence.
Leaderboards and reads belong to other services; the engine only inserts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class InsertResult:
    """
    Result of an insert operation.

    Attributes:
        record_id: Identifier assigned by the backend, if it returns one.
        backend: Name of the backend that stored the row.
    """
    record_id: Optional[str] = None
    backend: str = ""

    def __str__(self) -> str:
        return f"InsertResult(backend={self.backend}, record_id={self.record_id})"


class ScoreStorage(ABC):
    """
    Abstract base class for score storage backends.

    A score row holds idea_id, user_id, the seven metrics, composite_score,
    founder_rank, and goblin_verdict (see ScoreSet.to_record).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used for logging and the status endpoint.
        """
        pass

    @abstractmethod
    def insert_score(self, record: Dict[str, Any]) -> InsertResult:
        """
        Insert one score row.

        Args:
            record: Row produced by ScoreSet.to_record().

        Returns:
            InsertResult describing the stored row.

        Raises:
            PersistenceError: If the write failed.
        """
        pass

    def __str__(self) -> str:
        return f"ScoreStorage({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
