"""
Preference Service.

Owns one user's PreferenceRecord for the duration of a session and hands out
a CategoryReconciler per category. Every reconciler writes through the same
record and store, so a change in one category never drops another's.
"""

import logging

from overcook.preferences.categories import CATEGORY_SPECS, Category
from overcook.preferences.reconciler import CategoryReconciler
from overcook.preferences.record import PreferenceRecord
from overcook.preferences.store import PreferenceStore

logger = logging.getLogger(__name__)


class PreferenceService:
    """Session-scoped preference state for a single user."""

    def __init__(self, user_id: str, store: PreferenceStore):
        self.user_id = user_id
        self.store = store
        self.record: PreferenceRecord | None = None
        self.reconcilers: dict[Category, CategoryReconciler] = {
            category: CategoryReconciler(spec, self._write)
            for category, spec in CATEGORY_SPECS.items()
        }

    async def _write(self, record: PreferenceRecord) -> bool:
        # self.store is rebound per request (fresh access token)
        return await self.store.write(record)

    @property
    def ready(self) -> bool:
        return self.record is not None

    async def load(self) -> bool:
        """
        Read the persisted record and reconcile every category.

        A user with no stored row starts from an empty record. If the read
        fails the service stays unloaded (defaults shown, nothing written)
        and the next call retries.
        """
        try:
            record = await self.store.read(self.user_id)
        except Exception as e:
            logger.warning(f"Failed to load preferences for user {self.user_id}: {e}")
            return False

        self.record = record or PreferenceRecord.empty(self.user_id)
        for reconciler in self.reconcilers.values():
            reconciler.load(self.record)
        return True

    async def ensure_loaded(self) -> None:
        if not self.ready:
            await self.load()

    def get(self, category: Category | str) -> CategoryReconciler:
        return self.reconcilers[Category(category)]

    def snapshot(self) -> dict[str, dict[str, list[str]]]:
        return {c.value: r.snapshot() for c, r in self.reconcilers.items()}
