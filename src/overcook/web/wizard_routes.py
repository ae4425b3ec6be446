"""
Wizard API endpoints.

Step-by-step input for a recipe request: leftovers, then equipment and
seasonings, then cuisine/calorie/time/diet preferences. State lives in the
browser session only.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from overcook.errors import ValidationFailed
from overcook.preferences.categories import Category
from overcook.preferences.service import PreferenceService
from overcook.recipes.models import DEFAULT_CALORIE_RANGE, DEFAULT_TIME_RANGE
from overcook.web.preference_routes import get_optional_preference_service
from overcook.web.session import BrowserSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wizard", tags=["wizard"])


class IngredientRequest(BaseModel):
    name: str
    amount: str | None = None


class IngredientsCompleteRequest(BaseModel):
    # None means "use my saved selection" for a signed-in user
    equipment: list[str] | None = None
    seasonings: list[str] | None = None


class PreferencesRequest(BaseModel):
    cuisines: list[str] | None = None
    custom_cuisine: str = ""
    calorie_range: tuple[int, int] = DEFAULT_CALORIE_RANGE
    time_range: tuple[int, int] = DEFAULT_TIME_RANGE
    dietary_restrictions: list[str] | None = None


def _selection(
    requested: list[str] | None,
    prefs: PreferenceService | None,
    category: Category,
) -> list[str]:
    """
    Resolve one category's selection for the wizard.

    Anonymous callers get exactly what they sent. For a signed-in user an
    omitted list falls back to the selection on the preference screen, and
    every name sent must be one of the category's available options.
    """
    if prefs is None or not prefs.ready:
        return list(requested or [])
    reconciler = prefs.get(category)
    if requested is None:
        return list(reconciler.selected)
    unknown = [name for name in requested if name not in reconciler.available]
    if unknown:
        label = category.value.replace("_", " ")
        raise ValidationFailed(f"Not an available {label} option: {', '.join(unknown)}")
    return list(requested)


@router.get("")
async def get_wizard(session: BrowserSession = Depends(get_session)) -> dict:
    """Current wizard step and inputs."""
    return session.wizard.to_dict()


@router.post("/ingredients")
async def add_ingredient(req: IngredientRequest, session: BrowserSession = Depends(get_session)) -> dict:
    session.wizard.add_ingredient(req.name, req.amount)
    return session.wizard.to_dict()


@router.delete("/ingredients/{index}")
async def remove_ingredient(index: int, session: BrowserSession = Depends(get_session)) -> dict:
    session.wizard.remove_ingredient(index)
    return session.wizard.to_dict()


@router.post("/ingredients/complete")
async def complete_ingredients(
    req: IngredientsCompleteRequest,
    session: BrowserSession = Depends(get_session),
    prefs: PreferenceService | None = Depends(get_optional_preference_service),
) -> dict:
    """Lock in equipment and seasoning selections and move to preferences."""
    session.wizard.complete_ingredients(
        _selection(req.equipment, prefs, Category.EQUIPMENT),
        _selection(req.seasonings, prefs, Category.SEASONINGS),
    )
    return session.wizard.to_dict()


@router.put("/preferences")
async def set_preferences(
    req: PreferencesRequest,
    session: BrowserSession = Depends(get_session),
    prefs: PreferenceService | None = Depends(get_optional_preference_service),
) -> dict:
    session.wizard.set_preferences(
        cuisines=_selection(req.cuisines, prefs, Category.CUISINES),
        calorie_range=req.calorie_range,
        time_range=req.time_range,
        dietary_restrictions=_selection(req.dietary_restrictions, prefs, Category.DIETARY),
        custom_cuisine=req.custom_cuisine,
    )
    return session.wizard.to_dict()


@router.post("/reset")
async def start_over(session: BrowserSession = Depends(get_session)) -> dict:
    """Start over: clear the wizard and every recipe generated this session."""
    session.wizard.start_over()
    session.recipes.clear()
    logger.info(f"Session {session.session_id} started over")
    return session.wizard.to_dict()
