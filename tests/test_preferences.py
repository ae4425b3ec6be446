"""
Tests for preference reconciliation.

- reconcile(): defaults/custom/removed merge
- CategoryReconciler: toggle, add_custom, remove, reset_removed, readiness
- PreferenceRecord: row round-trip with missing columns
- PreferenceStore / PreferenceService: read, write, load failures
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from overcook.preferences import (
    Category,
    CategoryReconciler,
    PreferenceRecord,
    PreferenceService,
    PreferenceStore,
    get_spec,
    reconcile,
)
from overcook.preferences.categories import CUISINE_DEFAULTS, SEASONING_DEFAULTS, CategorySpec


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


class FakeStore:
    """In-memory PreferenceStore stand-in that records every write."""

    def __init__(self, row: dict | None = None, fail_read: bool = False, fail_write: bool = False):
        self.row = row
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.writes: list[dict] = []

    async def read(self, user_id: str) -> PreferenceRecord | None:
        if self.fail_read:
            raise ConnectionError("database unavailable")
        if self.row is None:
            return None
        return PreferenceRecord.from_row(self.row)

    async def write(self, record: PreferenceRecord) -> bool:
        if self.fail_write:
            return False
        self.writes.append(record.to_row())
        return True


SALT_SPEC = CategorySpec(Category.SEASONINGS, ("Salt", "Pepper", "Cumin"), persist_selection=True)


def _loaded(spec: CategorySpec, store: FakeStore, user_id: str = "user-1") -> CategoryReconciler:
    """Reconciler for `spec` loaded from whatever `store` holds."""
    reconciler = CategoryReconciler(spec, store.write)
    record = _run(store.read(user_id)) or PreferenceRecord.empty(user_id)
    reconciler.load(record)
    return reconciler


# ---------------------------------------------------------------------------
# reconcile()
# ---------------------------------------------------------------------------

class TestReconcile:

    def test_defaults_only(self):
        assert reconcile(("A", "B"), [], []) == ["A", "B"]

    def test_removed_defaults_hidden(self):
        assert reconcile(("A", "B", "C"), [], ["B"]) == ["A", "C"]

    def test_custom_appended_after_defaults(self):
        assert reconcile(("A", "B"), ["Z", "Y"], []) == ["A", "B", "Z", "Y"]

    def test_no_duplicates(self):
        available = reconcile(("A", "B"), ["B", "C", "C"], [])
        assert available == ["A", "B", "C"]
        assert len(available) == len(set(available))

    def test_custom_shadowing_hidden_default_is_visible(self):
        assert reconcile(("Salt", "Pepper"), ["Salt"], ["Salt"]) == ["Pepper", "Salt"]

    def test_case_sensitive(self):
        assert reconcile(("Salt",), ["salt"], []) == ["Salt", "salt"]


# ---------------------------------------------------------------------------
# CategoryReconciler
# ---------------------------------------------------------------------------

class TestLoad:

    def test_stored_selection_filtered_to_available(self):
        store = FakeStore({"user_id": "u", "seasonings": ["Salt", "Saffron"], "removed_seasonings": []})
        reconciler = _loaded(SALT_SPEC, store)
        assert reconciler.selected == ["Salt"]

    def test_missing_row_uses_defaults(self):
        reconciler = _loaded(SALT_SPEC, FakeStore(None))
        assert reconciler.available == ["Salt", "Pepper", "Cumin"]
        assert reconciler.selected == []
        assert reconciler.ready

    def test_cuisine_selection_not_restored(self, sample_preference_row):
        reconciler = _loaded(get_spec(Category.CUISINES), FakeStore(sample_preference_row))
        assert reconciler.selected == []
        assert reconciler.available == [*CUISINE_DEFAULTS, "Ethiopian"]

    def test_selected_is_subset_of_available(self, sample_preference_row):
        reconciler = _loaded(get_spec(Category.SEASONINGS), FakeStore(sample_preference_row))
        assert set(reconciler.selected) <= set(reconciler.available)
        assert "Paprika" not in reconciler.available
        assert reconciler.available[-1] == "Sumac"


class TestSaltPepperScenario:
    """Remove a default, re-add it as custom, reload."""

    def test_remove_then_readd_then_reload(self):
        spec = CategorySpec(Category.SEASONINGS, ("Salt", "Pepper"), persist_selection=True)
        store = FakeStore({"user_id": "u", "seasonings": ["Salt"]})
        reconciler = _loaded(spec, store)

        assert _run(reconciler.remove("Salt")) is True
        assert reconciler.available == ["Pepper"]
        assert reconciler.selected == []
        assert store.writes[-1]["removed_seasonings"] == ["Salt"]
        assert store.writes[-1]["seasonings"] == []

        assert _run(reconciler.add_custom("Salt")) is True
        assert reconciler.available == ["Pepper", "Salt"]
        assert store.writes[-1]["custom_seasonings"] == ["Salt"]
        assert store.writes[-1]["removed_seasonings"] == ["Salt"]

        store.row = store.writes[-1]
        reloaded = _loaded(spec, store)
        assert reloaded.available == ["Pepper", "Salt"]

    def test_reset_brings_back_default(self):
        store = FakeStore({"user_id": "u", "removed_seasonings": ["Pepper"]})
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.reset_removed()) is True
        assert reconciler.available == ["Salt", "Pepper", "Cumin"]
        assert store.writes[-1]["removed_seasonings"] == []

    def test_reset_with_nothing_removed_is_noop(self):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.reset_removed()) is False
        assert store.writes == []


class TestToggle:

    def test_toggle_twice_restores_selection(self):
        store = FakeStore({"user_id": "u", "seasonings": ["Cumin"]})
        reconciler = _loaded(SALT_SPEC, store)
        before = list(reconciler.selected)

        _run(reconciler.toggle("Salt"))
        assert reconciler.selected == ["Cumin", "Salt"]
        _run(reconciler.toggle("Salt"))
        assert reconciler.selected == before
        assert store.writes[-1]["seasonings"] == before

    def test_toggle_persists_whole_record(self, sample_preference_row):
        store = FakeStore(sample_preference_row)
        reconciler = _loaded(get_spec(Category.SEASONINGS), store)
        _run(reconciler.toggle("Oregano"))

        row = store.writes[-1]
        assert row["seasonings"] == ["Salt", "Cumin", "Oregano"]
        # Untouched columns are carried through
        assert row["custom_cuisines"] == ["Ethiopian"]
        assert row["equipment"] == ["Oven"]

    def test_toggle_unavailable_name_ignored(self):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.toggle("Saffron")) is False
        assert reconciler.selected == []
        assert store.writes == []

    def test_cuisine_toggle_not_persisted(self):
        store = FakeStore(None)
        reconciler = _loaded(get_spec(Category.CUISINES), store)
        assert _run(reconciler.toggle("Thai")) is False
        assert reconciler.selected == ["Thai"]
        assert store.writes == []


class TestAddCustom:

    @pytest.mark.parametrize("name", ["", "   ", "Salt"])
    def test_blank_or_duplicate_is_noop(self, name):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.add_custom(name)) is False
        assert reconciler.available == ["Salt", "Pepper", "Cumin"]
        assert store.writes == []

    def test_new_option_not_selected(self):
        reconciler = _loaded(SALT_SPEC, FakeStore(None))
        _run(reconciler.add_custom("  Sumac "))
        assert reconciler.available[-1] == "Sumac"
        assert "Sumac" not in reconciler.selected

    def test_uses_and_clears_input_buffer(self):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        reconciler.input_buffer = "Za'atar"
        assert _run(reconciler.add_custom()) is True
        assert reconciler.input_buffer == ""
        assert store.writes[-1]["custom_seasonings"] == ["Za'atar"]

    def test_custom_cuisine_is_persisted(self):
        store = FakeStore(None)
        reconciler = _loaded(get_spec(Category.CUISINES), store)
        _run(reconciler.add_custom("Peruvian"))
        assert store.writes[-1]["custom_cuisines"] == ["Peruvian"]
        assert store.writes[-1]["cuisines"] == []


class TestRemove:

    def test_remove_custom_drops_from_custom(self):
        store = FakeStore({"user_id": "u", "custom_seasonings": ["Sumac"], "seasonings": ["Sumac"]})
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.remove("Sumac")) is True
        row = store.writes[-1]
        assert row["custom_seasonings"] == []
        assert row["removed_seasonings"] == []
        assert row["seasonings"] == []

    def test_remove_unknown_is_noop(self):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.remove("Saffron")) is False
        assert store.writes == []

    def test_removed_never_includes_custom_only_names(self):
        store = FakeStore({"user_id": "u", "custom_seasonings": ["Sumac"]})
        reconciler = _loaded(SALT_SPEC, store)
        _run(reconciler.remove("Sumac"))
        _run(reconciler.remove("Cumin"))
        assert store.writes[-1]["removed_seasonings"] == ["Cumin"]


class TestEditSequences:
    """Any mix of add/remove keeps `available` equal to the reconciled record."""

    @pytest.mark.parametrize("steps", [
        [("remove", "Salt"), ("add", "Salt"), ("remove", "Salt"), ("add", "Salt")],
        [("add", "Sumac"), ("add", "Sumac"), ("remove", "Sumac"), ("add", "Sumac")],
        [("remove", "Pepper"), ("remove", "Cumin"), ("add", "Cumin"), ("add", "Pepper")],
        [("add", "Salt"), ("remove", "Salt"), ("add", "Salt")],
        [("add", "Za'atar"), ("remove", "Salt"), ("remove", "Za'atar"), ("remove", "Salt"), ("add", "Salt")],
    ])
    def test_available_matches_record_after_each_step(self, steps):
        store = FakeStore(None)
        reconciler = _loaded(SALT_SPEC, store)
        for action, name in steps:
            if action == "add":
                _run(reconciler.add_custom(name))
            else:
                _run(reconciler.remove(name))

            rec = reconciler.persisted
            assert reconciler.available == reconcile(SALT_SPEC.defaults, rec.custom, rec.removed)
            assert len(reconciler.available) == len(set(reconciler.available))
            assert len(rec.custom) == len(set(rec.custom))
            assert set(reconciler.selected) <= set(reconciler.available)


class TestReadiness:

    def test_mutations_before_load_not_written(self):
        store = FakeStore(None)
        reconciler = CategoryReconciler(SALT_SPEC, store.write)
        assert not reconciler.ready
        assert reconciler.available == ["Salt", "Pepper", "Cumin"]

        _run(reconciler.toggle("Salt"))
        _run(reconciler.add_custom("Sumac"))
        assert reconciler.selected == ["Salt"]
        assert "Sumac" in reconciler.available
        assert store.writes == []

    def test_write_failure_keeps_in_memory_state(self):
        store = FakeStore(None, fail_write=True)
        reconciler = _loaded(SALT_SPEC, store)
        assert _run(reconciler.toggle("Salt")) is False
        assert reconciler.selected == ["Salt"]

    def test_version_bumps_on_each_write(self):
        store = FakeStore(None)
        record = PreferenceRecord.empty("u")
        reconciler = CategoryReconciler(SALT_SPEC, store.write)
        reconciler.load(record)
        _run(reconciler.toggle("Salt"))
        _run(reconciler.add_custom("Sumac"))
        assert record.version == 2


# ---------------------------------------------------------------------------
# PreferenceRecord / PreferenceStore
# ---------------------------------------------------------------------------

class TestPreferenceRecord:

    def test_missing_and_null_columns_read_as_empty(self):
        record = PreferenceRecord.from_row({"user_id": "u", "removed_equipment": None})
        for category in Category:
            rec = record.get(category)
            assert rec.selected == [] and rec.custom == [] and rec.removed == []

    def test_to_row_has_no_dietary_selection_column(self):
        row = PreferenceRecord.empty("u").to_row()
        assert row["user_id"] == "u"
        assert "custom_dietary_restrictions" in row
        assert "dietary_restrictions" not in row

    def test_from_row_preserves_values(self, sample_preference_row):
        record = PreferenceRecord.from_row(sample_preference_row)
        seasonings = record.get(Category.SEASONINGS)
        assert seasonings.selected == ["Salt", "Cumin"]
        assert seasonings.custom == ["Sumac"]
        assert seasonings.removed == ["Paprika"]


class TestPreferenceStore:

    def test_read_returns_none_for_missing_row(self, mock_supabase):
        mock_supabase.table.return_value.execute.return_value = None
        assert _run(PreferenceStore(mock_supabase).read("u")) is None

    def test_read_builds_record(self, mock_supabase, sample_preference_row):
        mock_supabase.table.return_value.execute.return_value = MagicMock(data=sample_preference_row)
        record = _run(PreferenceStore(mock_supabase).read("user-1"))
        assert record.get(Category.CUISINES).custom == ["Ethiopian"]
        mock_supabase.table.assert_called_with("user_preferences")

    def test_write_upserts_on_user_id(self, mock_supabase):
        ok = _run(PreferenceStore(mock_supabase).write(PreferenceRecord.empty("u")))
        assert ok is True
        table = mock_supabase.table.return_value
        _, kwargs = table.upsert.call_args
        assert kwargs["on_conflict"] == "user_id"

    def test_write_failure_returns_false(self, mock_supabase):
        mock_supabase.table.return_value.upsert.side_effect = RuntimeError("boom")
        assert _run(PreferenceStore(mock_supabase).write(PreferenceRecord.empty("u"))) is False


# ---------------------------------------------------------------------------
# PreferenceService
# ---------------------------------------------------------------------------

class TestPreferenceService:

    def test_load_reconciles_every_category(self, sample_preference_row):
        service = PreferenceService("user-1", FakeStore(sample_preference_row))
        assert _run(service.load()) is True
        assert service.ready
        snapshot = service.snapshot()
        assert set(snapshot) == {c.value for c in Category}
        assert snapshot["equipment"]["selected"] == ["Oven"]

    def test_failed_read_leaves_service_unloaded(self):
        store = FakeStore(None, fail_read=True)
        service = PreferenceService("user-1", store)
        assert _run(service.load()) is False
        assert not service.ready

        seasonings = service.get("seasonings")
        assert seasonings.available == list(SEASONING_DEFAULTS)
        _run(seasonings.toggle("Salt"))
        assert store.writes == []

    def test_categories_share_one_record(self):
        store = FakeStore(None)
        service = PreferenceService("user-1", store)
        _run(service.load())
        _run(service.get(Category.EQUIPMENT).toggle("Oven"))
        _run(service.get(Category.SEASONINGS).toggle("Salt"))
        row = store.writes[-1]
        assert row["equipment"] == ["Oven"]
        assert row["seasonings"] == ["Salt"]

    def test_unknown_category_raises(self):
        service = PreferenceService("user-1", FakeStore(None))
        with pytest.raises(ValueError):
            service.get("spices")

    def test_rebound_store_receives_writes(self):
        service = PreferenceService("user-1", FakeStore(None))
        _run(service.load())
        fresh = FakeStore(None)
        service.store = fresh
        _run(service.get("seasonings").toggle("Salt"))
        assert fresh.writes
