# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .catalog_service import CatalogService
from .order_service import OrderService
from .session_store import (
    DatastoreSessionStore,
    InMemorySessionStore,
    SessionStore,
)

__all__ = [
    "AuthService",
    "CatalogService",
    "OrderService",
    "SessionStore",
    "DatastoreSessionStore",
    "InMemorySessionStore",
]
