"""
Left OverCook - Database Client.

Provides Supabase access.
"""

from overcook.db.client import get_authenticated_client, get_service_client

__all__ = [
    "get_service_client",
    "get_authenticated_client",
]
