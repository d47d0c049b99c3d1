"""Supabase implementation of the key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrilog.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase-backed store keeping one row per key."""

    client: Client
    table: str = "app_state"

    def get_item(self, key: str) -> str | None:
        """Return the stored value for ``key``, if present."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return str(value) if value is not None else None

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the row for ``key``."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
