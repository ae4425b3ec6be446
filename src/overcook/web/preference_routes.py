"""
Preference API endpoints.

Per-category option lists for the wizard: toggle selections, add custom
options, hide/remove options, and bring hidden defaults back. Every change is
written to the user's stored preferences straight away (cuisine and dietary
selections excepted, they reset every visit).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from overcook.db.client import get_authenticated_client
from overcook.preferences.categories import Category
from overcook.preferences.reconciler import CategoryReconciler
from overcook.preferences.service import PreferenceService
from overcook.preferences.store import PreferenceStore
from overcook.web.auth import AuthenticatedUser, get_current_user, get_optional_user
from overcook.web.session import BrowserSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


# =============================================================================
# Request/Response Models
# =============================================================================


class OptionRequest(BaseModel):
    name: str


class CategoryResponse(BaseModel):
    category: str
    ready: bool
    available: list[str]
    selected: list[str]
    changed: bool = False


class AllPreferencesResponse(BaseModel):
    ready: bool
    categories: dict[str, CategoryResponse]


# =============================================================================
# Dependencies
# =============================================================================


def get_preference_store(user: AuthenticatedUser = Depends(get_current_user)) -> PreferenceStore:
    return PreferenceStore(get_authenticated_client(user.access_token))


def get_optional_preference_store(
    user: AuthenticatedUser | None = Depends(get_optional_user),
) -> PreferenceStore | None:
    if user is None:
        return None
    return PreferenceStore(get_authenticated_client(user.access_token))


async def get_preference_service(
    user: AuthenticatedUser = Depends(get_current_user),
    session: BrowserSession = Depends(get_session),
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferenceService:
    """The signed-in user's preferences for this session, loaded on first use."""
    service = session.preference_service(user.id, store)
    await service.ensure_loaded()
    return service


async def get_optional_preference_service(
    user: AuthenticatedUser | None = Depends(get_optional_user),
    session: BrowserSession = Depends(get_session),
    store: PreferenceStore | None = Depends(get_optional_preference_store),
) -> PreferenceService | None:
    """Like get_preference_service, but None for anonymous callers."""
    if user is None or store is None:
        return None
    service = session.preference_service(user.id, store)
    await service.ensure_loaded()
    return service


def _reconciler(service: PreferenceService, category: str) -> CategoryReconciler:
    try:
        return service.get(category)
    except ValueError:
        valid = ", ".join(c.value for c in Category)
        raise HTTPException(status_code=404, detail=f"Unknown category '{category}' (expected one of: {valid})")


def _response(reconciler: CategoryReconciler, changed: bool = False) -> CategoryResponse:
    return CategoryResponse(
        category=reconciler.category.value,
        ready=reconciler.ready,
        changed=changed,
        **reconciler.snapshot(),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=AllPreferencesResponse)
async def get_all_preferences(
    service: PreferenceService = Depends(get_preference_service),
) -> AllPreferencesResponse:
    """Every category's available options and current selection."""
    return AllPreferencesResponse(
        ready=service.ready,
        categories={c.value: _response(r) for c, r in service.reconcilers.items()},
    )


@router.get("/{category}", response_model=CategoryResponse)
async def get_category(
    category: str,
    service: PreferenceService = Depends(get_preference_service),
) -> CategoryResponse:
    return _response(_reconciler(service, category))


@router.post("/{category}/toggle", response_model=CategoryResponse)
async def toggle_option(
    category: str,
    req: OptionRequest,
    service: PreferenceService = Depends(get_preference_service),
) -> CategoryResponse:
    """Select or deselect an option."""
    reconciler = _reconciler(service, category)
    before = list(reconciler.selected)
    await reconciler.toggle(req.name)
    return _response(reconciler, changed=reconciler.selected != before)


@router.post("/{category}/custom", response_model=CategoryResponse)
async def add_custom_option(
    category: str,
    req: OptionRequest,
    service: PreferenceService = Depends(get_preference_service),
) -> CategoryResponse:
    """Add a user-defined option (blank or duplicate names are ignored)."""
    reconciler = _reconciler(service, category)
    added = await reconciler.add_custom(req.name)
    return _response(reconciler, changed=added)


@router.delete("/{category}/{name:path}", response_model=CategoryResponse)
async def remove_option(
    category: str,
    name: str,
    service: PreferenceService = Depends(get_preference_service),
) -> CategoryResponse:
    """Hide a built-in option or delete a custom one."""
    reconciler = _reconciler(service, category)
    removed = await reconciler.remove(name)
    return _response(reconciler, changed=removed)


@router.post("/{category}/reset", response_model=CategoryResponse)
async def reset_removed_options(
    category: str,
    service: PreferenceService = Depends(get_preference_service),
) -> CategoryResponse:
    """Restore every hidden built-in option."""
    reconciler = _reconciler(service, category)
    restored = await reconciler.reset_removed()
    return _response(reconciler, changed=restored)
