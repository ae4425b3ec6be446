"""
Preference Categories.

Built-in option lists and per-category persistence rules. Defaults are the same
for every user; users hide defaults (removed) or add their own (custom).
"""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Option categories reconciled against the user's preference record."""
    SEASONINGS = "seasonings"
    EQUIPMENT = "equipment"
    CUISINES = "cuisines"
    DIETARY = "dietary_restrictions"


SEASONING_DEFAULTS = (
    "Salt", "Black Pepper", "Olive Oil", "Vegetable Oil", "Garlic Powder",
    "Onion Powder", "Paprika", "Cumin", "Oregano", "Basil", "Thyme", "Rosemary",
)

EQUIPMENT_DEFAULTS = (
    "Oven", "Stovetop", "Microwave", "Air Fryer", "Blender",
    "Food Processor", "Slow Cooker", "Instant Pot", "Grill",
)

CUISINE_DEFAULTS = (
    "Asian", "Italian", "Mexican", "Indian", "Mediterranean",
    "American", "French", "Thai", "Japanese", "Middle Eastern",
)

DIETARY_DEFAULTS = (
    "Vegetarian", "Vegan", "Pescatarian", "Gluten-Free",
    "Dairy-Free", "Nut-Free", "Low-Carb", "Keto",
)


@dataclass(frozen=True)
class CategorySpec:
    """Static description of one category."""
    category: Category
    defaults: tuple[str, ...]
    # Whether toggling an option writes the selection back to storage.
    # Cuisines (and dietary restrictions) start with an empty selection on
    # every visit and are never persisted.
    persist_selection: bool


CATEGORY_SPECS: dict[Category, CategorySpec] = {
    Category.SEASONINGS: CategorySpec(Category.SEASONINGS, SEASONING_DEFAULTS, persist_selection=True),
    Category.EQUIPMENT: CategorySpec(Category.EQUIPMENT, EQUIPMENT_DEFAULTS, persist_selection=True),
    Category.CUISINES: CategorySpec(Category.CUISINES, CUISINE_DEFAULTS, persist_selection=False),
    Category.DIETARY: CategorySpec(Category.DIETARY, DIETARY_DEFAULTS, persist_selection=False),
}


def get_spec(category: Category | str) -> CategorySpec:
    """Look up a category spec by enum or value. Raises ValueError if unknown."""
    return CATEGORY_SPECS[Category(category)]
