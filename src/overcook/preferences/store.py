"""
Preference Store.

Reads and upserts the `user_preferences` row for one user. Writes are
fire-and-forget: a failure is logged and reported as False, never raised,
so an in-session edit is never lost to a storage hiccup.
"""

import logging

from supabase import Client

from overcook.preferences.record import PreferenceRecord

logger = logging.getLogger(__name__)

TABLE = "user_preferences"


class PreferenceStore:
    """Supabase-backed preference persistence (last write wins)."""

    def __init__(self, client: Client):
        self._client = client

    async def read(self, user_id: str) -> PreferenceRecord | None:
        """Load a user's record, or None if they have never saved one."""
        result = (
            self._client.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
        # maybe_single() returns None (not an empty response) on no rows
        if result is None or not result.data:
            return None
        return PreferenceRecord.from_row(result.data)

    async def write(self, record: PreferenceRecord) -> bool:
        """Upsert the full record. Returns True on success."""
        try:
            self._client.table(TABLE).upsert(
                record.to_row(),
                on_conflict="user_id",
            ).execute()
            return True
        except Exception as e:
            logger.error(f"Failed to save preferences for user {record.user_id}: {e}")
            return False
