"""
Left OverCook - Supabase Client.

Low-level database access. All queries go through clients created here.

- Service client: bypasses RLS, used for token validation and public reads
  (leaderboard).
- Authenticated client: carries the user's JWT so row-level security applies.
"""

from supabase import Client, create_client

from overcook.config import settings

# Singleton client instances
_service_client: Client | None = None


def get_service_client() -> Client:
    """
    Get the service-role Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _service_client

    if _service_client is None:
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_authenticated_client(access_token: str) -> Client:
    """
    Get a Supabase client scoped to a user's access token.

    A fresh client per call; the token only lives as long as the request.
    """
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(access_token)
    return client
