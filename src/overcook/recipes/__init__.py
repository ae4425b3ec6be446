"""
Recipes: wizard input, LLM generation, the per-session recipe store, and chat.
"""

from .models import GenerationCriteria, Ingredient, Preferences, Recipe, RecipeBatch
from .session_store import SessionRecipeStore
from .wizard import Wizard, WizardStep

__all__ = [
    "GenerationCriteria",
    "Ingredient",
    "Preferences",
    "Recipe",
    "RecipeBatch",
    "SessionRecipeStore",
    "Wizard",
    "WizardStep",
]
