"""Dependency injection / factory functions for FastAPI.

Stateless collaborators are cached singletons; the per-request piece is the
caller's :class:`SessionStore`, resolved from the session cookie.
"""

from functools import lru_cache

from fastapi import Depends, Request, Response

from finarrow.config import Settings, get_settings
from finarrow.facade import DashboardFacade
from finarrow.logging_config import get_logger
from finarrow.services.session_store import SessionRegistry, SessionStore

logger = get_logger(__name__)

__all__ = [
    "get_settings",
    "get_facade",
    "get_session_registry",
    "get_session_store",
    "get_writable_session_store",
]


# ── Singletons (stateless, reusable) ────────────────────────────────────

@lru_cache
def get_facade() -> DashboardFacade:
    return DashboardFacade(settings=get_settings())


@lru_cache
def get_session_registry() -> SessionRegistry:
    settings = get_settings()
    return SessionRegistry(data_key=settings.session_data_key, max_sessions=settings.max_sessions)


# ── Per-request ─────────────────────────────────────────────────────────

def get_session_store(
    request: Request,
    settings: Settings = Depends(get_settings),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionStore:
    """The caller's record store for reads.

    Without a known session cookie this is an empty, unregistered store, so
    the caller sees the demo data and nothing is kept.
    """
    store = registry.get(request.cookies.get(settings.session_cookie_name))
    if store is None:
        return SessionStore({}, key=registry.data_key)
    return store


def get_writable_session_store(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionStore:
    """The caller's record store for writes; starts a session and sets the cookie if needed."""
    cookie = settings.session_cookie_name
    store = registry.get(request.cookies.get(cookie))
    if store is not None:
        return store
    session_id, store = registry.create()
    response.set_cookie(cookie, session_id, httponly=True, samesite="lax")
    return store
