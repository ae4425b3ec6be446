"""
Recipe Generator.

Turns wizard criteria into a batch of 3-5 recipes via the LLM gateway.
The response must validate as a RecipeBatch; anything else is a hard error,
never a partial batch. Each recipe gets a freshly minted id so ids stay
unique across repeated "load more" calls within a session.
"""

import logging
import uuid
from typing import Protocol

import openai
from instructor.core import InstructorRetryException
from pydantic import ValidationError

from overcook.errors import GenerationError
from overcook.llm.client import call_llm
from overcook.recipes.models import GenerationCriteria, RecipeBatch
from overcook.recipes.prompts import GENERATION_SYSTEM_PROMPT, build_generation_prompt

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
PAYMENT_REQUIRED_MESSAGE = "Payment required. Please add credits to your workspace."
INVALID_RESPONSE_MESSAGE = "Invalid response format from AI"


class Generator(Protocol):
    """Anything that can produce a recipe batch (the LLM generator, test fakes)."""

    async def generate(
        self,
        criteria: GenerationCriteria,
        existing_titles: list[str] | None = None,
    ) -> RecipeBatch: ...


def _find_api_error(exc: BaseException) -> openai.APIError | None:
    """Walk the exception chain for the underlying OpenAI error, if any."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, openai.APIError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


def to_generation_error(exc: Exception) -> GenerationError:
    """Map a gateway/validation failure to a user-facing GenerationError."""
    api_error = _find_api_error(exc)
    if isinstance(api_error, openai.RateLimitError):
        return GenerationError(RATE_LIMIT_MESSAGE, status_code=429)
    if isinstance(api_error, openai.APIStatusError):
        if api_error.status_code == 402:
            return GenerationError(PAYMENT_REQUIRED_MESSAGE, status_code=402)
        return GenerationError(f"AI API error: {api_error.status_code}")
    if api_error is not None:
        return GenerationError(str(api_error) or "AI API error")
    if isinstance(exc, (InstructorRetryException, ValidationError, ValueError)):
        return GenerationError(INVALID_RESPONSE_MESSAGE)
    return GenerationError(str(exc) or "Unknown error occurred")


class RecipeGenerator:
    """LLM-backed Generator."""

    def __init__(self, model: str | None = None, temperature: float | None = None):
        self.model = model
        self.temperature = temperature

    async def generate(
        self,
        criteria: GenerationCriteria,
        existing_titles: list[str] | None = None,
    ) -> RecipeBatch:
        """
        Generate one batch.

        Args:
            criteria: Ingredient names, equipment, preferences, seasonings
            existing_titles: Titles already shown; the model is asked to avoid
                them (best effort, not a uniqueness guarantee)

        Raises:
            GenerationError: gateway failure, rate limit, or malformed output
        """
        user_prompt = build_generation_prompt(criteria, existing_titles)
        logger.info(
            f"Generating recipes for {len(criteria.ingredients)} ingredients"
            f" (avoiding {len(existing_titles or [])} titles)"
        )

        try:
            batch = await call_llm(
                response_model=RecipeBatch,
                system_prompt=GENERATION_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                purpose="generate_recipes",
                model=self.model,
                temperature=self.temperature,
            )
        except Exception as e:
            error = to_generation_error(e)
            logger.error(f"Recipe generation failed: {e}")
            raise error from e

        for recipe in batch.recipes:
            recipe.id = uuid.uuid4().hex[:12]

        logger.info(f"Generated {len(batch.recipes)} recipes")
        return batch
