"""
Preference Reconciliation.

Merges a category's built-in defaults with the user's persisted custom
additions and removals into the list of options shown for selection, and
keeps the persisted record consistent as options are added, removed, or
toggled.

Reconciliation rule:
    available = [d for d in defaults if d not in removed]
                + [c for c in custom if c not already listed]
    selected  = [s for s in selected if s in available]

`removed` only hides built-in defaults. A custom option with the same name as
a hidden default is a separate entry the user re-added and stays visible.
Names match exactly (case-sensitive).
"""

import logging
from collections.abc import Awaitable, Callable

from overcook.preferences.categories import CategorySpec
from overcook.preferences.record import CategoryRecord, PreferenceRecord

logger = logging.getLogger(__name__)

# Persists the whole record; returns False on failure (never raises)
Persist = Callable[[PreferenceRecord], Awaitable[bool]]


def reconcile(defaults: tuple[str, ...] | list[str], custom: list[str], removed: list[str]) -> list[str]:
    """Compute the displayable options: visible defaults first, then custom in insertion order."""
    hidden = set(removed)
    available: list[str] = []
    seen: set[str] = set()
    for name in defaults:
        if name not in hidden and name not in seen:
            available.append(name)
            seen.add(name)
    for name in custom:
        if name not in seen:
            available.append(name)
            seen.add(name)
    return available


class CategoryReconciler:
    """
    In-session view of one category.

    Until `load()` runs the reconciler is not ready: it shows the built-in
    defaults with nothing selected, and mutations stay in memory only so an
    unloaded record never overwrites the stored one.
    """

    def __init__(self, spec: CategorySpec, persist: Persist):
        self.spec = spec
        self._persist = persist
        self._record: PreferenceRecord | None = None
        self.ready = False
        self.available: list[str] = list(spec.defaults)
        self.selected: list[str] = []
        self.input_buffer = ""

    @property
    def category(self):
        return self.spec.category

    @property
    def persisted(self) -> CategoryRecord | None:
        if self._record is None:
            return None
        return self._record.get(self.spec.category)

    def load(self, record: PreferenceRecord) -> dict[str, list[str]]:
        """Recompute available/selected from a freshly loaded record."""
        self._record = record
        rec = record.get(self.spec.category)
        self.available = reconcile(self.spec.defaults, rec.custom, rec.removed)
        if self.spec.persist_selection:
            self.selected = [s for s in dict.fromkeys(rec.selected) if s in self.available]
        else:
            # Cuisine-style categories start every visit with nothing selected
            self.selected = []
        self.ready = True
        return self.snapshot()

    def snapshot(self) -> dict[str, list[str]]:
        return {"available": list(self.available), "selected": list(self.selected)}

    async def _write(self, persist_selection: bool) -> bool:
        if not self.ready or self._record is None:
            logger.debug(f"{self.spec.category.value}: not loaded yet, skipping write")
            return False
        rec = self._record.get(self.spec.category)
        if persist_selection and self.spec.persist_selection:
            rec.selected = list(self.selected)
        self._record.bump()
        return await self._persist(self._record)

    async def toggle(self, name: str) -> bool:
        """
        Flip `name` in the selection.

        Returns whether the change was persisted. Names not currently
        available are ignored.
        """
        if name not in self.available:
            return False
        if name in self.selected:
            self.selected = [s for s in self.selected if s != name]
        else:
            self.selected = [*self.selected, name]

        if not self.spec.persist_selection:
            return False
        return await self._write(persist_selection=True)

    async def add_custom(self, name: str | None = None) -> bool:
        """
        Add a user option (from `name`, or the input buffer when omitted).

        Blank and duplicate names are ignored. The new option is not selected.
        Returns True if the option was added.
        """
        candidate = (self.input_buffer if name is None else name).strip()
        if not candidate or candidate in self.available:
            return False

        self.available = [*self.available, candidate]
        self.input_buffer = ""
        if self.ready and self._record is not None:
            rec = self._record.get(self.spec.category)
            if candidate not in rec.custom:
                rec.custom.append(candidate)
        await self._write(persist_selection=False)
        return True

    async def remove(self, name: str) -> bool:
        """
        Remove an option from the list and from the selection.

        A built-in default is hidden via `removed`; a custom option is dropped
        from `custom` (a custom that shadows a hidden default is both).
        Returns True if the option was present.
        """
        if name not in self.available:
            return False

        self.available = [a for a in self.available if a != name]
        self.selected = [s for s in self.selected if s != name]

        if self.ready and self._record is not None:
            rec = self._record.get(self.spec.category)
            if name in rec.custom:
                rec.custom = [c for c in rec.custom if c != name]
            if name in self.spec.defaults and name not in rec.removed:
                rec.removed.append(name)
        await self._write(persist_selection=True)
        return True

    async def reset_removed(self) -> bool:
        """Un-hide every removed default. Returns True if anything came back."""
        if not self.ready or self._record is None:
            return False
        rec = self._record.get(self.spec.category)
        if not rec.removed:
            return False
        rec.removed = []
        self.available = reconcile(self.spec.defaults, rec.custom, rec.removed)
        await self._write(persist_selection=False)
        return True
