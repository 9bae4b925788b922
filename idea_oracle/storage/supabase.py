"""
Supabase storage backend for Idea Oracle.

Inserts score rows through the supabase-py client (PostgREST under the hood).

=============================================================================
SCORES TABLE
=============================================================================

| Column                  | Type    | Description                          |
|-------------------------|---------|--------------------------------------|
| id                      | uuid    | Primary key (default gen_random_uuid)|
| idea_id                 | uuid    | Submitted idea                       |
| user_id                 | uuid    | Submitting user                      |
| ai_hype_beast           | int2    | 0-100                                |
| buzzword_density        | int2    | 0-100                                |
| cringe_founder_energy   | int2    | 0-100                                |
| market_viability        | int2    | 0-100                                |
| pivot_to_ai_probability | int2    | 0-100                                |
| yc_bait_score           | int2    | 0-100                                |
| delusion_index          | int2    | 55-100                               |
| composite_score         | int2    | 0-100                                |
| founder_rank            | text    | Chad / Beta / Gamma / Founder Extraordinaire |
| goblin_verdict          | text    | 2-3 sentences                        |
| created_at              | timestamptz | default now()                    |

The service role key is required: inserts bypass row level security.
=============================================================================
"""

from typing import Any, Dict, Optional

from supabase import Client, create_client

from idea_oracle.config import (
    SUPABASE_SCORES_TABLE,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_URL,
)
from idea_oracle.errors import PersistenceError
from idea_oracle.storage.base import InsertResult, ScoreStorage


class SupabaseScoreStorage(ScoreStorage):
    """
    Supabase-backed score storage.

    Configuration is pulled from environment variables via idea_oracle.config:
    - SUPABASE_URL: Project URL
    - SUPABASE_SERVICE_ROLE_KEY: Service role key
    - SUPABASE_SCORES_TABLE: Table receiving score rows
    """

    def __init__(
        self,
        url: str = None,
        key: str = None,
        table_name: str = None,
        client: Optional[Client] = None,
    ):
        """
        Initialize SupabaseScoreStorage.

        Args:
            url: Project URL. Defaults to config.SUPABASE_URL.
            key: Service role key. Defaults to config.SUPABASE_SERVICE_ROLE_KEY.
            table_name: Table name. Defaults to config.SUPABASE_SCORES_TABLE.
            client: Pre-built client (skips create_client).
        """
        # Use provided values, or fall back to config if None (not empty string)
        self.url = url if url is not None else SUPABASE_URL
        self.key = key if key is not None else SUPABASE_SERVICE_ROLE_KEY
        self.table_name = table_name if table_name is not None else SUPABASE_SCORES_TABLE
        self._client = client

    @property
    def name(self) -> str:
        return "supabase"

    def _validate_config(self) -> None:
        """Validate that required configuration is present."""
        if not self.url:
            raise PersistenceError("SUPABASE_URL is not configured")
        if not self.key:
            raise PersistenceError("SUPABASE_SERVICE_ROLE_KEY is not configured")
        if not self.table_name:
            raise PersistenceError("SUPABASE_SCORES_TABLE is not configured")

    @property
    def client(self) -> Client:
        """Lazily created client, so importing never touches the network."""
        if self._client is None:
            self._validate_config()
            try:
                self._client = create_client(self.url, self.key)
            except Exception as e:
                raise PersistenceError(f"Could not create Supabase client: {e}") from e
        return self._client

    def insert_score(self, record: Dict[str, Any]) -> InsertResult:
        """
        Insert one row into the scores table.

        Raises:
            PersistenceError: Client creation or the insert failed.
        """
        client = self.client
        try:
            response = client.table(self.table_name).insert([record]).execute()
        except Exception as e:
            raise PersistenceError(f"Insert into {self.table_name} failed: {e}") from e

        rows = getattr(response, "data", None) or []
        record_id = None
        if rows and isinstance(rows[0], dict) and rows[0].get("id") is not None:
            record_id = str(rows[0]["id"])
        return InsertResult(record_id=record_id, backend=self.name)
