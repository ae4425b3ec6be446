"""
Recipe API endpoints.

Generation, load-more, lookup and chat against the session recipe store.
Generation uses the wizard's inputs unless the request carries its own
criteria.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from overcook.recipes import chat as recipe_chat
from overcook.recipes.chat import ChatMessage
from overcook.recipes.models import GenerationCriteria, Recipe
from overcook.web.session import BrowserSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


class RecipeListResponse(BaseModel):
    recipes: list[dict]
    total: int


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)


def _dump(recipes: list[Recipe]) -> list[dict]:
    return [r.to_storage() for r in recipes]


def _criteria(session: BrowserSession, criteria: GenerationCriteria | None) -> GenerationCriteria:
    return criteria if criteria is not None else session.wizard.criteria()


@router.post("/generate", response_model=RecipeListResponse)
async def generate_recipes(
    criteria: GenerationCriteria | None = None,
    session: BrowserSession = Depends(get_session),
) -> RecipeListResponse:
    """Replace this session's recipes with a fresh batch."""
    batch = await session.recipes.generate(_criteria(session, criteria))
    return RecipeListResponse(recipes=_dump(batch.recipes), total=len(session.recipes.recipes))


@router.post("/load-more", response_model=RecipeListResponse)
async def load_more_recipes(
    criteria: GenerationCriteria | None = None,
    session: BrowserSession = Depends(get_session),
) -> RecipeListResponse:
    """Append another batch. Returns only the new recipes; `total` counts all."""
    batch = await session.recipes.load_more(_criteria(session, criteria))
    return RecipeListResponse(recipes=_dump(batch.recipes), total=len(session.recipes.recipes))


@router.get("", response_model=RecipeListResponse)
async def list_recipes(session: BrowserSession = Depends(get_session)) -> RecipeListResponse:
    recipes = session.recipes.get_all()
    return RecipeListResponse(recipes=_dump(recipes), total=len(recipes))


@router.delete("", response_model=RecipeListResponse)
async def clear_recipes(session: BrowserSession = Depends(get_session)) -> RecipeListResponse:
    session.recipes.clear()
    return RecipeListResponse(recipes=[], total=0)


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, session: BrowserSession = Depends(get_session)) -> dict:
    """Recipe detail. 404 (front end returns to the start) if unknown."""
    return session.recipes.resolve(recipe_id).to_storage()


@router.get("/{recipe_id}/chat", response_model=ChatMessage)
async def chat_greeting(recipe_id: str, session: BrowserSession = Depends(get_session)) -> ChatMessage:
    """Opening assistant message for a recipe's chat panel."""
    session.recipes.resolve(recipe_id)
    return recipe_chat.greeting()


@router.post("/{recipe_id}/chat", response_model=ChatMessage)
async def chat_about_recipe(
    recipe_id: str,
    req: ChatRequest,
    session: BrowserSession = Depends(get_session),
) -> ChatMessage:
    """Ask a question about a recipe. Send the full history each time."""
    recipe = session.recipes.resolve(recipe_id)
    return await recipe_chat.chat(recipe, req.messages)
