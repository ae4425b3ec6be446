"""
Recipe Ledger.

Append-only history of saved and cooked recipes plus the profile points that
cooking earns. Backed by Supabase tables `saved_recipes`, `cooked_recipes`,
`profiles` and the `update_profile_points_and_level` function.

Every call runs with the user's own client so row-level security applies.
Failures raise LedgerError carrying the backend's message.
"""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError
from supabase import Client

from overcook.errors import LedgerError, ValidationFailed
from overcook.ledger.scoring import (
    calculate_points,
    estimate_food_waste_saved,
    level_for_points,
    validate_rating,
)
from overcook.recipes.models import Recipe

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 10
MAX_LEADERBOARD_SIZE = 50


class LedgerEntry(BaseModel):
    """One saved or cooked recipe."""
    id: str
    recipe: Recipe
    created_at: str | None = None
    rating: int | None = None
    points_earned: int | None = None
    food_waste_saved: float | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "LedgerEntry":
        return cls(
            id=str(row["id"]),
            recipe=Recipe.model_validate(row.get("recipe_data") or {}),
            created_at=row.get("created_at"),
            rating=row.get("rating"),
            points_earned=row.get("points_earned"),
            food_waste_saved=row.get("food_waste_saved"),
        )


class Profile(BaseModel):
    id: str
    display_name: str | None = None
    username: str | None = None
    total_points: int = 0
    level: int = 1


class LeaderboardEntry(BaseModel):
    display_name: str | None = None
    username: str | None = None
    total_points: int = 0
    level: int = 1


class CookResult(BaseModel):
    entry: LedgerEntry
    points_earned: int
    food_waste_saved: float


def _rows(client: Client, table: str, user_id: str) -> list[dict]:
    result = (
        client.table(table)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return result.data or []


def _entries(rows: list[dict]) -> list[LedgerEntry]:
    entries = []
    for row in rows:
        try:
            entries.append(LedgerEntry.from_row(row))
        except (KeyError, ValidationError) as e:
            logger.warning(f"Skipping unreadable ledger row {row.get('id')}: {e}")
    return entries


class RecipeLedger:
    """Saved/cooked history and profile for one signed-in user."""

    def __init__(self, client: Client, user_id: str):
        self._client = client
        self.user_id = user_id

    # -------------------------------------------------------------------------
    # Saved recipes
    # -------------------------------------------------------------------------

    async def save_recipe(self, recipe: Recipe) -> LedgerEntry:
        try:
            result = (
                self._client.table("saved_recipes")
                .insert({"user_id": self.user_id, "recipe_data": recipe.to_storage()})
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to save recipe for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e
        if not result.data:
            raise LedgerError("Recipe could not be saved")
        return LedgerEntry.from_row(result.data[0])

    async def list_saved(self) -> list[LedgerEntry]:
        """Saved recipes, newest first."""
        try:
            return _entries(_rows(self._client, "saved_recipes", self.user_id))
        except Exception as e:
            logger.error(f"Failed to list saved recipes for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e

    async def delete_saved(self, entry_id: str) -> None:
        try:
            (
                self._client.table("saved_recipes")
                .delete()
                .eq("id", entry_id)
                .eq("user_id", self.user_id)  # Security: ensure user owns row
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete saved recipe {entry_id}: {e}")
            raise LedgerError(str(e)) from e

    # -------------------------------------------------------------------------
    # Cooked recipes
    # -------------------------------------------------------------------------

    async def record_cooked(self, recipe: Recipe, rating: int) -> CookResult:
        """
        Log a cooked recipe and award points.

        The cooked row is the source of truth; if the points update fails
        afterwards it is logged and the result still reports the points.
        """
        validate_rating(rating)
        points = calculate_points(rating)
        waste = estimate_food_waste_saved()

        try:
            result = (
                self._client.table("cooked_recipes")
                .insert({
                    "user_id": self.user_id,
                    "recipe_data": recipe.to_storage(),
                    "rating": rating,
                    "points_earned": points,
                    "food_waste_saved": waste,
                })
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to record cooked recipe for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e
        if not result.data:
            raise LedgerError("Cooked recipe could not be recorded")

        try:
            self._client.rpc(
                "update_profile_points_and_level",
                {"user_id": self.user_id, "points_to_add": points},
            ).execute()
        except Exception as e:
            logger.error(f"Error updating points for user {self.user_id}: {e}")

        return CookResult(
            entry=LedgerEntry.from_row(result.data[0]),
            points_earned=points,
            food_waste_saved=waste,
        )

    async def list_cooked(self) -> list[LedgerEntry]:
        """Cooked recipes, newest first."""
        try:
            return _entries(_rows(self._client, "cooked_recipes", self.user_id))
        except Exception as e:
            logger.error(f"Failed to list cooked recipes for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self) -> Profile:
        try:
            result = (
                self._client.table("profiles")
                .select("*")
                .eq("id", self.user_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to load profile for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e

        if result is None or not result.data:
            return Profile(id=self.user_id)
        row = result.data
        total = row.get("total_points") or 0
        return Profile(
            id=str(row.get("id", self.user_id)),
            display_name=row.get("display_name"),
            username=row.get("username"),
            total_points=total,
            level=row.get("level") or level_for_points(total),
        )

    async def update_username(self, username: str) -> str:
        username = username.strip()
        if not username:
            raise ValidationFailed("Username cannot be empty")
        try:
            self._client.table("profiles").update({"username": username}).eq("id", self.user_id).execute()
        except Exception as e:
            logger.error(f"Failed to update username for user {self.user_id}: {e}")
            raise LedgerError(str(e)) from e
        return username


async def get_leaderboard(client: Client, limit: int = DEFAULT_LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
    """Top profiles by total points, highest first."""
    limit = max(1, min(limit, MAX_LEADERBOARD_SIZE))
    try:
        result = (
            client.table("profiles")
            .select("display_name, username, total_points, level")
            .order("total_points", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to load leaderboard: {e}")
        raise LedgerError(str(e)) from e

    board = []
    for row in result.data or []:
        total = row.get("total_points") or 0
        board.append(LeaderboardEntry(
            display_name=row.get("display_name"),
            username=row.get("username"),
            total_points=total,
            level=row.get("level") or level_for_points(total),
        ))
    return board
