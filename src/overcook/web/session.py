"""
Browser session management.

A browser session (one tab) is identified by the X-Session-Id header. It owns
the wizard input, the session recipe store with its transient storage, and a
preference service per signed-in user. Sessions idle longer than
`session_expire_hours` are dropped with everything they hold.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Header, Response

from overcook.config import get_settings
from overcook.preferences.service import PreferenceService
from overcook.preferences.store import PreferenceStore
from overcook.recipes.generator import Generator, RecipeGenerator
from overcook.recipes.session_store import SessionRecipeStore
from overcook.recipes.wizard import Wizard
from overcook.session_storage import SessionStorage

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Id"


def _utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


@dataclass
class BrowserSession:
    """Everything one browser tab holds between requests."""
    session_id: str
    storage: SessionStorage
    recipes: SessionRecipeStore
    wizard: Wizard = field(default_factory=Wizard)
    preferences: dict[str, PreferenceService] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utc_now)
    last_active_at: datetime = field(default_factory=_utc_now)

    def touch(self) -> None:
        self.last_active_at = _utc_now()

    def preference_service(self, user_id: str, store: PreferenceStore) -> PreferenceService:
        """The user's preference service for this session, bound to `store`."""
        service = self.preferences.get(user_id)
        if service is None:
            service = PreferenceService(user_id, store)
            self.preferences[user_id] = service
        else:
            service.store = store
        return service


class SessionRegistry:
    """In-memory sessions keyed by session id."""

    def __init__(
        self,
        generator_factory: Callable[[], Generator] = RecipeGenerator,
        expire_hours: int | None = None,
    ):
        self._sessions: dict[str, BrowserSession] = {}
        self._generator_factory = generator_factory
        self._expire_hours = expire_hours

    @property
    def expire_after(self) -> timedelta:
        hours = self._expire_hours
        if hours is None:
            hours = get_settings().session_expire_hours
        return timedelta(hours=hours)

    def _create(self) -> BrowserSession:
        storage = SessionStorage()
        session = BrowserSession(
            session_id=uuid.uuid4().hex,
            storage=storage,
            recipes=SessionRecipeStore(storage, self._generator_factory()),
        )
        self._sessions[session.session_id] = session
        logger.debug(f"Created session {session.session_id}")
        return session

    def is_expired(self, session: BrowserSession) -> bool:
        return _utc_now() - session.last_active_at > self.expire_after

    def get_or_create(self, session_id: str | None) -> BrowserSession:
        """Return the live session for `session_id`, or a fresh one."""
        self.purge_expired()
        session = self._sessions.get(session_id) if session_id else None
        if session is None:
            session = self._create()
        session.touch()
        return session

    def drop(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.storage.clear()

    def purge_expired(self) -> int:
        """Drop every expired session. Returns how many were dropped."""
        expired = [sid for sid, s in self._sessions.items() if self.is_expired(s)]
        for sid in expired:
            self.drop(sid)
        if expired:
            logger.info(f"Expired {len(expired)} idle sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


_registry: SessionRegistry | None = None


def get_registry() -> SessionRegistry:
    """Process-wide session registry (FastAPI dependency)."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


async def get_session(
    response: Response,
    x_session_id: str | None = Header(None),
    registry: SessionRegistry = Depends(get_registry),
) -> BrowserSession:
    """Resolve the caller's browser session and echo its id back in the response."""
    session = registry.get_or_create(x_session_id)
    response.headers[SESSION_HEADER] = session.session_id
    return session
