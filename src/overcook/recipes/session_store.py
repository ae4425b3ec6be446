"""
Session Recipe Store.

Holds every recipe generated during one browsing session, in display order.
The full list is mirrored to session storage after each successful change so
a detail view opened on a fresh page load can still resolve a recipe by id.

No eviction: recipes stay until the session ends or the user starts over.
Only one generation may be in flight per store. A result that arrives after
the store was cleared or replaced belongs to an abandoned request and is
dropped.
"""

import logging

from pydantic import ValidationError

from overcook.errors import GenerationError, GenerationInProgress, RecipeNotFound
from overcook.recipes.generator import Generator
from overcook.recipes.models import GenerationCriteria, Recipe, RecipeBatch
from overcook.session_storage import SessionStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "generatedRecipes"


class SessionRecipeStore:
    """Recipe batch owner for one session."""

    def __init__(self, storage: SessionStorage, generator: Generator):
        self.storage = storage
        self.generator = generator
        self.recipes: list[Recipe] = []
        self._in_flight = False
        # Bumped by clear/replace; a generation started under an older epoch is stale
        self._epoch = 0

    @property
    def busy(self) -> bool:
        """True while a generate/load-more call is awaiting the generator."""
        return self._in_flight

    async def _call_generator(
        self,
        criteria: GenerationCriteria,
        existing_titles: list[str] | None,
    ) -> RecipeBatch | None:
        """Run the generator. Returns None if the store was reset while waiting."""
        if self._in_flight:
            raise GenerationInProgress()
        self._in_flight = True
        epoch = self._epoch
        try:
            batch = await self.generator.generate(criteria, existing_titles)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Generator raised unexpectedly: {e}")
            raise GenerationError(str(e) or "Unknown error occurred") from e
        finally:
            self._in_flight = False

        if epoch != self._epoch:
            logger.info(f"Discarding {len(batch.recipes)} recipes from an abandoned request")
            return None
        return batch

    def _persist(self) -> None:
        self.storage.put(STORAGE_KEY, [r.to_storage() for r in self.recipes])

    async def generate(self, criteria: GenerationCriteria) -> RecipeBatch:
        """
        Replace the store's contents with a new batch.

        Raises:
            GenerationError: the existing batch is left untouched
            GenerationInProgress: another generation is running
        """
        batch = await self._call_generator(criteria, None)
        if batch is None:
            return RecipeBatch()
        self.recipes = list(batch.recipes)
        self._persist()
        return batch

    async def load_more(self, criteria: GenerationCriteria) -> RecipeBatch:
        """
        Append a new batch to the existing recipes.

        Titles already shown are passed to the generator so it can steer away
        from them. Returns only the newly added recipes.
        """
        existing_titles = [r.title for r in self._current()]
        batch = await self._call_generator(criteria, existing_titles)
        if batch is None:
            return RecipeBatch()
        self.recipes = [*self._current(), *batch.recipes]
        self._persist()
        return batch

    def _current(self) -> list[Recipe]:
        """In-memory recipes, recovered from session storage when memory is empty."""
        if self.recipes:
            return self.recipes

        stored = self.storage.get(STORAGE_KEY)
        if not stored:
            return []
        try:
            self.recipes = [Recipe.model_validate(r) for r in stored]
        except ValidationError as e:
            logger.warning(f"Discarding unreadable recipe snapshot: {e}")
            self.storage.delete(STORAGE_KEY)
            return []
        return self.recipes

    def get_all(self) -> list[Recipe]:
        return list(self._current())

    def resolve(self, recipe_id: str) -> Recipe:
        """
        Look up a recipe by id.

        Raises:
            RecipeNotFound: no recipe with that id in memory or session storage
        """
        for recipe in self._current():
            if recipe.id == recipe_id:
                return recipe
        raise RecipeNotFound(recipe_id)

    def replace(self, recipes: list[Recipe]) -> None:
        """Install recipes opened from elsewhere (saved/cooked history) as the current batch."""
        self._epoch += 1
        self.recipes = list(recipes)
        self._persist()

    def clear(self) -> None:
        """Start over: drop every recipe from memory and session storage."""
        self._epoch += 1
        self.recipes = []
        self.storage.delete(STORAGE_KEY)
