"""
Authentication utilities for FastAPI routes.

Shared auth dependencies used by all route modules. Identity lives in
Supabase Auth; the front end sends the user's JWT as a Bearer token.
"""

import logging

from fastapi import Header
from pydantic import BaseModel

from overcook.db.client import get_service_client
from overcook.errors import AuthenticationRequired

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """Authenticated user info from Supabase JWT."""
    id: str
    email: str | None
    access_token: str


def _validate_token(authorization: str) -> AuthenticatedUser:
    if not authorization.startswith("Bearer "):
        raise AuthenticationRequired("Invalid authorization format")

    access_token = authorization[7:]  # Remove "Bearer " prefix

    try:
        user_response = get_service_client().auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"Auth validation failed: {e}")
        raise AuthenticationRequired("Invalid or expired token") from e

    if not user_response or not user_response.user:
        raise AuthenticationRequired("Invalid or expired token")

    user = user_response.user
    return AuthenticatedUser(id=user.id, email=user.email, access_token=access_token)


async def get_current_user(authorization: str | None = Header(None)) -> AuthenticatedUser:
    """
    Require a signed-in user.

    Expects Authorization header: "Bearer <access_token>"
    """
    if not authorization:
        raise AuthenticationRequired()
    return _validate_token(authorization)


async def get_optional_user(authorization: str | None = Header(None)) -> AuthenticatedUser | None:
    """Signed-in user if a valid token was sent, else None (anonymous browsing)."""
    if not authorization:
        return None
    try:
        return _validate_token(authorization)
    except AuthenticationRequired:
        return None


def sign_out(user: AuthenticatedUser) -> None:
    """Revoke the user's sessions in Supabase Auth."""
    try:
        get_service_client().auth.admin.sign_out(user.access_token)
    except Exception as e:
        logger.warning(f"Sign-out failed for user {user.id}: {e}")
