# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# Everything a request handler needs lives on one AppContext built at
# startup and stored on app.state. Handlers receive it through Depends(),
# so nothing is read from module-level singletons.
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services import (
    AuthService,
    CatalogService,
    DatastoreSessionStore,
    InMemorySessionStore,
    OrderService,
    SessionStore,
)
from lib.datastore import Datastore


@dataclass
class AppContext:
    """Per-application dependencies, constructed once in the lifespan."""
    settings: Settings
    datastore: Datastore
    sessions: SessionStore
    auth: AuthService
    catalog: CatalogService
    orders: OrderService


def build_session_store(settings: Settings, datastore: Datastore) -> SessionStore:
    """Pick the session backend named by SESSION_BACKEND."""
    if settings.SESSION_BACKEND == "memory":
        return InMemorySessionStore(ttl=settings.session_ttl)
    return DatastoreSessionStore(datastore, ttl=settings.session_ttl)


def build_context(
    settings: Settings,
    datastore: Datastore,
    sessions: SessionStore | None = None,
) -> AppContext:
    """Wire services together around a datastore and session store."""
    if sessions is None:
        sessions = build_session_store(settings, datastore)

    catalog = CatalogService(datastore)
    return AppContext(
        settings=settings,
        datastore=datastore,
        sessions=sessions,
        auth=AuthService(datastore, sessions, bcrypt_rounds=settings.BCRYPT_ROUNDS),
        catalog=catalog,
        orders=OrderService(datastore, catalog),
    )


def get_context(request: Request) -> AppContext:
    """
    Get the application context.

    Returns the instance built during application startup.
    """
    return request.app.state.context


# Type alias for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
