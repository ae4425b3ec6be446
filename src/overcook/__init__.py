"""
Left OverCook - leftover-driven recipe suggestions.

Packages:
- preferences: Reconciles default/custom/removed option sets per user
- recipes: Wizard input, LLM recipe generation, session recipe store, chat
- ledger: Saved/cooked recipe history, points and leaderboard
- web: FastAPI application
"""

__version__ = "1.0.0"
