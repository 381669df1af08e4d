"""Key-value JSON document storage on a Supabase table."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client


@dataclass
class SupabaseDocumentTable:
    """Read and write JSON documents keyed by string.

    Expects a table with columns ``key`` (primary key), ``data`` (jsonb) and
    ``updated_at``.
    """

    client: Client
    table: str = "documents"

    def get(self, key: str) -> object | None:
        """Return the stored document for a key."""
        response = (
            self.client.table(self.table)
            .select("data")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("data")

    def put(self, key: str, data: object) -> None:
        """Insert or replace the document for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "data": data,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
