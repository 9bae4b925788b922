"""
Storage module.

Persists score rows via Supabase or an in-memory backend.
"""

from idea_oracle.storage.base import InsertResult, ScoreStorage
from idea_oracle.storage.memory import MockScoreStorage
from idea_oracle.storage.supabase import SupabaseScoreStorage

__all__ = [
    "InsertResult",
    "ScoreStorage",
    "MockScoreStorage",
    "SupabaseScoreStorage",
]
