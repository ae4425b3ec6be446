"""
Preference Record.

The persisted per-user preference row (Supabase `user_preferences`), as an
explicit typed struct. One CategoryRecord per option category; columns that
are missing or NULL in the row read as empty lists.
"""

from dataclasses import dataclass, field
from typing import Any

from overcook.preferences.categories import Category

# Column names per category: (selected, custom, removed).
# Dietary restrictions have no persisted selection column.
COLUMNS: dict[Category, tuple[str | None, str, str]] = {
    Category.SEASONINGS: ("seasonings", "custom_seasonings", "removed_seasonings"),
    Category.EQUIPMENT: ("equipment", "custom_equipment", "removed_equipment"),
    Category.CUISINES: ("cuisines", "custom_cuisines", "removed_cuisines"),
    Category.DIETARY: (None, "custom_dietary_restrictions", "removed_dietary_restrictions"),
}


def _as_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(v) for v in value]


@dataclass
class CategoryRecord:
    """Persisted sets for one category. Lists keep insertion order."""
    selected: list[str] = field(default_factory=list)
    custom: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


@dataclass
class PreferenceRecord:
    """
    A user's persisted preferences across all categories.

    `version` counts in-process mutations so callers can tell whether the
    record changed; it is not stored.
    """
    user_id: str
    categories: dict[Category, CategoryRecord] = field(
        default_factory=lambda: {c: CategoryRecord() for c in Category}
    )
    version: int = 0

    def get(self, category: Category) -> CategoryRecord:
        return self.categories.setdefault(category, CategoryRecord())

    def bump(self) -> None:
        self.version += 1

    @classmethod
    def empty(cls, user_id: str) -> "PreferenceRecord":
        return cls(user_id=user_id)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PreferenceRecord":
        """Build from a `user_preferences` row, filling absent columns with []."""
        categories: dict[Category, CategoryRecord] = {}
        for category, (selected_col, custom_col, removed_col) in COLUMNS.items():
            categories[category] = CategoryRecord(
                selected=_as_list(row.get(selected_col)) if selected_col else [],
                custom=_as_list(row.get(custom_col)),
                removed=_as_list(row.get(removed_col)),
            )
        return cls(user_id=str(row.get("user_id", "")), categories=categories)

    def to_row(self) -> dict[str, Any]:
        """Serialize to a full `user_preferences` row for upsert."""
        row: dict[str, Any] = {"user_id": self.user_id}
        for category, (selected_col, custom_col, removed_col) in COLUMNS.items():
            rec = self.get(category)
            if selected_col:
                row[selected_col] = list(rec.selected)
            row[custom_col] = list(rec.custom)
            row[removed_col] = list(rec.removed)
        return row
