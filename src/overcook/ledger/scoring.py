"""
Points and levels.

Scoring rule for cooking a recipe:
    50 base + 10 per rating star + 20 food-waste bonus

Level is derived from total points: every 500 points is one level, starting
at level 1.
"""

import random

from overcook.errors import ValidationFailed

BASE_POINTS = 50
POINTS_PER_STAR = 10
WASTE_BONUS = 20
POINTS_PER_LEVEL = 500

MIN_RATING = 1
MAX_RATING = 5

# Estimated grams of food saved per cooked recipe
WASTE_SAVED_RANGE_G = (200.0, 700.0)


def validate_rating(rating: int) -> int:
    """Raise ValidationFailed unless 1 <= rating <= 5."""
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailed("Select a star rating before continuing")
    return rating


def calculate_points(rating: int) -> int:
    """Points awarded for cooking a recipe with the given rating."""
    validate_rating(rating)
    return BASE_POINTS + rating * POINTS_PER_STAR + WASTE_BONUS


def level_for_points(total_points: int) -> int:
    """Level for a running points total (level 1 at zero points)."""
    return 1 + max(total_points, 0) // POINTS_PER_LEVEL


def estimate_food_waste_saved(rng: random.Random | None = None) -> float:
    """Rough grams of leftovers rescued by one cooked recipe."""
    low, high = WASTE_SAVED_RANGE_G
    return round((rng or random).uniform(low, high), 1)
