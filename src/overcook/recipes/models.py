"""
Recipe domain models.

Recipe fields arrive from the LLM in camelCase (`cuisineType`, `prepTime`) and
are stored in session storage the same way; Python code uses snake_case.
Optional fields default-fill so a sparse record still validates.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_CALORIE_RANGE = (0, 1000)
DEFAULT_TIME_RANGE = (0, 120)
MAX_CALORIES = 5000
MAX_MINUTES = 300


class Ingredient(BaseModel):
    """A leftover the user has on hand. Only the name is sent to generation."""
    name: str
    amount: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Ingredient name cannot be empty")
        return v

    @field_validator("amount")
    @classmethod
    def blank_amount_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class Preferences(BaseModel):
    """Per-run recipe filters. Ranges are inclusive [min, max]."""
    model_config = ConfigDict(populate_by_name=True)

    cuisine_type: list[str] = Field(default_factory=list, alias="cuisineType")
    calorie_range: tuple[int, int] = Field(default=DEFAULT_CALORIE_RANGE, alias="calorieRange")
    time_range: tuple[int, int] = Field(default=DEFAULT_TIME_RANGE, alias="timeRange")
    dietary_restrictions: list[str] = Field(default_factory=list, alias="dietaryRestrictions")

    @field_validator("cuisine_type", "dietary_restrictions")
    @classmethod
    def dedupe_names(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(s.strip() for s in v if s and s.strip()))

    @model_validator(mode="after")
    def ranges_ordered(self) -> "Preferences":
        for label, (low, high), ceiling in (
            ("calorie", self.calorie_range, MAX_CALORIES),
            ("time", self.time_range, MAX_MINUTES),
        ):
            if low < 0:
                raise ValueError(f"{label} range minimum cannot be negative")
            if low > high:
                raise ValueError(f"{label} range minimum must not exceed maximum")
            if high > ceiling:
                raise ValueError(f"{label} range maximum cannot exceed {ceiling}")
        return self


class Recipe(BaseModel):
    """A generated recipe. `id` is unique within one session store."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str
    description: str = ""
    cuisine_type: str = Field(default="", alias="cuisineType")
    prep_time: int = Field(default=0, alias="prepTime", ge=0)
    calories: int = Field(default=0, ge=0)
    ingredients: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)


class RecipeBatch(BaseModel):
    """One generation response: the recipes to show, in order."""
    recipes: list[Recipe] = Field(default_factory=list)


class GenerationCriteria(BaseModel):
    """Everything the generator needs for one request."""
    ingredients: list[str]
    equipment: list[str] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    common_seasonings: list[str] = Field(default_factory=list)
