"""
Ledger API endpoints.

Saving and cooking recipes, the user's history and profile, and the public
leaderboard. Everything except the leaderboard requires sign-in.
"""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from supabase import Client

from overcook.db.client import get_authenticated_client, get_service_client
from overcook.errors import RecipeNotFound
from overcook.ledger.ledger import (
    DEFAULT_LEADERBOARD_SIZE,
    CookResult,
    LeaderboardEntry,
    LedgerEntry,
    Profile,
    RecipeLedger,
    get_leaderboard,
)
from overcook.web.auth import AuthenticatedUser, get_current_user
from overcook.web.session import BrowserSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ledger"])


class CookRequest(BaseModel):
    rating: int = Field(ge=0, le=5)


class UsernameRequest(BaseModel):
    username: str


class OpenedRecipe(BaseModel):
    recipe_id: str


def get_ledger(user: AuthenticatedUser = Depends(get_current_user)) -> RecipeLedger:
    return RecipeLedger(get_authenticated_client(user.access_token), user.id)


def get_public_client() -> Client:
    return get_service_client()


# =============================================================================
# Saved recipes
# =============================================================================


@router.post("/recipes/{recipe_id}/save", response_model=LedgerEntry)
async def save_recipe(
    recipe_id: str,
    session: BrowserSession = Depends(get_session),
    ledger: RecipeLedger = Depends(get_ledger),
) -> LedgerEntry:
    recipe = session.recipes.resolve(recipe_id)
    entry = await ledger.save_recipe(recipe)
    logger.info(f"User {ledger.user_id} saved recipe '{recipe.title}'")
    return entry


@router.get("/saved", response_model=list[LedgerEntry])
async def list_saved(ledger: RecipeLedger = Depends(get_ledger)) -> list[LedgerEntry]:
    return await ledger.list_saved()


@router.delete("/saved/{entry_id}")
async def delete_saved(entry_id: str, ledger: RecipeLedger = Depends(get_ledger)) -> dict:
    await ledger.delete_saved(entry_id)
    return {"success": True}


# =============================================================================
# Cooked recipes
# =============================================================================


@router.post("/recipes/{recipe_id}/cook", response_model=CookResult)
async def cook_recipe(
    recipe_id: str,
    req: CookRequest,
    session: BrowserSession = Depends(get_session),
    ledger: RecipeLedger = Depends(get_ledger),
) -> CookResult:
    """Mark a recipe as cooked with a 1-5 star rating and award points."""
    recipe = session.recipes.resolve(recipe_id)
    result = await ledger.record_cooked(recipe, req.rating)
    logger.info(f"User {ledger.user_id} cooked '{recipe.title}' for {result.points_earned} points")
    return result


@router.get("/cooked", response_model=list[LedgerEntry])
async def list_cooked(ledger: RecipeLedger = Depends(get_ledger)) -> list[LedgerEntry]:
    return await ledger.list_cooked()


# =============================================================================
# Re-open from history
# =============================================================================


async def _open(entries: list[LedgerEntry], entry_id: str, session: BrowserSession) -> OpenedRecipe:
    for entry in entries:
        if entry.id == entry_id:
            session.recipes.replace([entry.recipe])
            return OpenedRecipe(recipe_id=entry.recipe.id)
    raise RecipeNotFound(entry_id)


@router.post("/saved/{entry_id}/open", response_model=OpenedRecipe)
async def open_saved(
    entry_id: str,
    session: BrowserSession = Depends(get_session),
    ledger: RecipeLedger = Depends(get_ledger),
) -> OpenedRecipe:
    """Load a saved recipe into the session so the detail view can show it."""
    return await _open(await ledger.list_saved(), entry_id, session)


@router.post("/cooked/{entry_id}/open", response_model=OpenedRecipe)
async def open_cooked(
    entry_id: str,
    session: BrowserSession = Depends(get_session),
    ledger: RecipeLedger = Depends(get_ledger),
) -> OpenedRecipe:
    return await _open(await ledger.list_cooked(), entry_id, session)


# =============================================================================
# Profile & leaderboard
# =============================================================================


@router.get("/profile", response_model=Profile)
async def get_profile(ledger: RecipeLedger = Depends(get_ledger)) -> Profile:
    return await ledger.get_profile()


@router.put("/profile/username")
async def update_username(req: UsernameRequest, ledger: RecipeLedger = Depends(get_ledger)) -> dict:
    username = await ledger.update_username(req.username)
    return {"username": username}


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(
    limit: int = Query(DEFAULT_LEADERBOARD_SIZE, ge=1, le=50),
    client: Client = Depends(get_public_client),
) -> list[LeaderboardEntry]:
    return await get_leaderboard(client, limit)
