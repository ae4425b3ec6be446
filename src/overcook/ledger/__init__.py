"""
Ledger: saved and cooked recipe history, points, levels and the leaderboard.
"""

from .ledger import (
    CookResult,
    LeaderboardEntry,
    LedgerEntry,
    Profile,
    RecipeLedger,
    get_leaderboard,
)
from .scoring import calculate_points, level_for_points

__all__ = [
    "CookResult",
    "LeaderboardEntry",
    "LedgerEntry",
    "Profile",
    "RecipeLedger",
    "calculate_points",
    "get_leaderboard",
    "level_for_points",
]
