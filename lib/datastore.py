# =============================================================================
# lib/datastore.py - Datastore Interface
# =============================================================================
# The relational store is an external collaborator. Everything the app needs
# from it is listed here as one abstract class, so routes and services can be
# handed either the Supabase implementation or an in-memory fake.
#
# Rows cross this boundary as plain dicts, the way PostgREST returns them.
# =============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any


class DatastoreError(Exception):
    """
    Error during datastore operations.

    Carries the failing operation and its context so the router can log
    the real cause and still answer the client with a generic message.
    """

    def __init__(
        self,
        message: str,
        code: str = "DATASTORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class UniqueViolationError(DatastoreError):
    """A unique constraint rejected an insert (Postgres SQLSTATE 23505)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="UNIQUE_VIOLATION", details=details)


class DatastoreUnavailableError(DatastoreError):
    """The datastore never answered during the startup readiness wait."""

    def __init__(self, attempts: int):
        super().__init__(
            f"Datastore unreachable after {attempts} attempts",
            code="DATASTORE_UNAVAILABLE",
            details={"attempts": attempts},
        )


class Datastore(ABC):
    """
    Abstract datastore used by the services.

    Every method is a single statement against the store. Implementations
    raise DatastoreError (or a subclass) on failure and never return
    partial results.
    """

    @abstractmethod
    async def ping(self) -> None:
        """Trivial round-trip. Raises DatastoreError if unreachable."""

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @abstractmethod
    async def fetch_user_by_email(self, email: str) -> dict[str, Any] | None:
        """Return the full user row (including password_hash) or None."""

    @abstractmethod
    async def insert_user(
        self,
        name: str,
        email: str,
        password_hash: str,
    ) -> dict[str, Any]:
        """Insert a user and return {id, name, email}."""

    # -------------------------------------------------------------------------
    # Flowers
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_flowers(self) -> list[dict[str, Any]]:
        """All flower rows ordered by id ascending."""

    @abstractmethod
    async def fetch_flower(self, flower_id: int) -> dict[str, Any] | None:
        """A single flower row or None."""

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    @abstractmethod
    async def insert_order(
        self,
        user_id: int,
        flower_id: int,
        quantity: int,
        total_price: Decimal,
    ) -> dict[str, Any]:
        """Insert an order and return the full row."""

    @abstractmethod
    async def list_orders_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """
        Orders owned by user_id, newest first.

        Each row carries `flower_name` and `image_url` from the referenced
        flower.
        """

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    @abstractmethod
    async def insert_session(
        self,
        session_id: str,
        user_id: int,
        user_name: str,
        expires_at: datetime,
    ) -> None:
        ...

    @abstractmethod
    async def fetch_session(self, session_id: str) -> dict[str, Any] | None:
        """Return {session_id, user_id, user_name, expires_at} or None."""

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        ...

    @abstractmethod
    async def delete_expired_sessions(self, now: datetime) -> int:
        """Delete sessions with expires_at <= now and return how many went."""
