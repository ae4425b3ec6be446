"""
Recipe Wizard.

Collects one run's input: leftover ingredients, then equipment/seasoning
selections, then preferences. Nothing here is persisted; once recipes are
requested only the ingredient names travel onward.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from overcook.errors import ValidationFailed
from overcook.recipes.models import GenerationCriteria, Ingredient, Preferences


class WizardStep(Enum):
    """Wizard steps in display order."""
    WELCOME = "welcome"
    INGREDIENTS = "ingredients"
    PREFERENCES = "preferences"
    RESULTS = "results"


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    return str(errors[0].get("msg", e)).removeprefix("Value error, ")


@dataclass
class Wizard:
    """In-progress wizard state for one session."""
    step: WizardStep = WizardStep.WELCOME
    ingredients: list[Ingredient] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    common_seasonings: list[str] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)

    def add_ingredient(self, name: str, amount: str | None = None) -> Ingredient:
        """Add a leftover. Raises ValidationFailed for a blank name."""
        try:
            ingredient = Ingredient(name=name, amount=amount)
        except ValidationError as e:
            raise ValidationFailed(_first_error(e)) from e
        self.ingredients.append(ingredient)
        if self.step == WizardStep.WELCOME:
            self.step = WizardStep.INGREDIENTS
        return ingredient

    def remove_ingredient(self, index: int) -> Ingredient:
        """Remove by position. Raises ValidationFailed if out of range."""
        if not 0 <= index < len(self.ingredients):
            raise ValidationFailed(f"No ingredient at position {index}")
        return self.ingredients.pop(index)

    def complete_ingredients(self, equipment: list[str], seasonings: list[str]) -> None:
        """Finish the ingredient step. Requires at least one ingredient."""
        if not self.ingredients:
            raise ValidationFailed("Add at least one ingredient")
        self.equipment = list(dict.fromkeys(equipment))
        self.common_seasonings = list(dict.fromkeys(seasonings))
        self.step = WizardStep.PREFERENCES

    def set_preferences(
        self,
        cuisines: list[str],
        calorie_range: tuple[int, int],
        time_range: tuple[int, int],
        dietary_restrictions: list[str] | None = None,
        custom_cuisine: str = "",
    ) -> Preferences:
        """
        Finish the preferences step.

        A free-text cuisine is appended to the selected cuisines.
        """
        all_cuisines = list(cuisines)
        if custom_cuisine.strip():
            all_cuisines.append(custom_cuisine.strip())
        try:
            self.preferences = Preferences(
                cuisine_type=all_cuisines,
                calorie_range=calorie_range,
                time_range=time_range,
                dietary_restrictions=dietary_restrictions or [],
            )
        except ValidationError as e:
            raise ValidationFailed(_first_error(e)) from e
        self.step = WizardStep.RESULTS
        return self.preferences

    def criteria(self) -> GenerationCriteria:
        """Build the generation request. Raises ValidationFailed with no ingredients."""
        if not self.ingredients:
            raise ValidationFailed("Add at least one ingredient")
        return GenerationCriteria(
            ingredients=[i.name for i in self.ingredients],
            equipment=self.equipment,
            preferences=self.preferences,
            common_seasonings=self.common_seasonings,
        )

    def start_over(self) -> None:
        """Back to the ingredient step with empty inputs."""
        self.step = WizardStep.INGREDIENTS
        self.ingredients = []
        self.equipment = []
        self.common_seasonings = []
        self.preferences = Preferences()

    def to_dict(self) -> dict:
        return {
            "step": self.step.value,
            "ingredients": [i.model_dump() for i in self.ingredients],
            "equipment": list(self.equipment),
            "common_seasonings": list(self.common_seasonings),
            "preferences": self.preferences.model_dump(by_alias=True),
        }
