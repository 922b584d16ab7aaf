# =============================================================================
# lib/supabase_client.py - Supabase Datastore
# =============================================================================
# Implements the Datastore interface on top of the async Supabase client.
# Each method issues exactly one PostgREST request (one SQL statement) and
# translates any failure into a DatastoreError carrying the operation name.
#
# Tables:
#   users          (id, name, email UNIQUE, password_hash)
#   flowers        (id, name, price, image_url, ...)
#   orders         (id, user_id, flower_id, quantity, total_price, created_at)
#   user_sessions  (sid, user_id, user_name, expires_at)
#
# Usage:
#   datastore = await SupabaseDatastore.connect(settings)
#   flowers = await datastore.list_flowers()
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from supabase import AsyncClient, acreate_client

from app.config import Settings
from lib.datastore import Datastore, DatastoreError, UniqueViolationError

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: Exception) -> bool:
    return getattr(error, "code", None) == UNIQUE_VIOLATION or UNIQUE_VIOLATION in str(error)


def _flatten_order(row: dict[str, Any]) -> dict[str, Any]:
    """Lift the embedded `flowers` resource into flower_name / image_url."""
    flower = row.pop("flowers", None) or {}
    row["flower_name"] = flower.get("name")
    row["image_url"] = flower.get("image_url")
    return row


class SupabaseDatastore(Datastore):
    """
    Datastore backed by a Supabase (Postgres) project.

    One instance is created per application and handed down through the
    AppContext. The underlying httpx connection pool is shared by every
    request.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    @classmethod
    async def connect(cls, settings: Settings) -> "SupabaseDatastore":
        """
        Create the async client.

        Uses the service_role key, which bypasses Row Level Security. This is
        appropriate for server-side operations.

        Raises:
            DatastoreError: If client creation fails
        """
        try:
            client = await acreate_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY,
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
            ) from e
        logger.info("Supabase client initialized")
        return cls(client)

    async def ping(self) -> None:
        try:
            await self.client.table("flowers").select("id").limit(1).execute()
        except Exception as e:
            raise DatastoreError(f"Ping failed: {e}", code="PING_FAILED") from e

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def fetch_user_by_email(self, email: str) -> dict[str, Any] | None:
        try:
            response = await (
                self.client.table("users")
                .select("id, name, email, password_hash")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    async def insert_user(
        self,
        name: str,
        email: str,
        password_hash: str,
    ) -> dict[str, Any]:
        data = {"name": name, "email": email, "password_hash": password_hash}

        try:
            response = await self.client.table("users").insert(data).execute()
        except Exception as e:
            if _is_unique_violation(e):
                raise UniqueViolationError(
                    "Email already registered",
                    details={"table": "users"},
                ) from e
            raise DatastoreError(
                f"Failed to insert user: {e}",
                code="INSERT_USER_FAILED",
            ) from e

        if not response.data:
            raise DatastoreError("Insert returned no data", code="INSERT_NO_DATA")

        row = response.data[0]
        logger.info(f"Created user: {row['id']}")
        return {"id": row["id"], "name": row["name"], "email": row["email"]}

    # -------------------------------------------------------------------------
    # Flowers
    # -------------------------------------------------------------------------

    async def list_flowers(self) -> list[dict[str, Any]]:
        try:
            response = await (
                self.client.table("flowers")
                .select("*")
                .order("id")
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to fetch flowers: {e}",
                code="FETCH_FLOWERS_FAILED",
            ) from e

        return response.data or []

    async def fetch_flower(self, flower_id: int) -> dict[str, Any] | None:
        try:
            response = await (
                self.client.table("flowers")
                .select("*")
                .eq("id", flower_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to fetch flower: {e}",
                code="FETCH_FLOWER_FAILED",
                details={"flower_id": flower_id},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    async def insert_order(
        self,
        user_id: int,
        flower_id: int,
        quantity: int,
        total_price: Decimal,
    ) -> dict[str, Any]:
        data = {
            "user_id": user_id,
            "flower_id": flower_id,
            "quantity": quantity,
            # numeric column; send as text so no precision is lost in JSON
            "total_price": str(total_price),
        }

        try:
            response = await self.client.table("orders").insert(data).execute()
        except Exception as e:
            raise DatastoreError(
                f"Failed to insert order: {e}",
                code="INSERT_ORDER_FAILED",
                details={"user_id": user_id, "flower_id": flower_id},
            ) from e

        if not response.data:
            raise DatastoreError("Insert returned no data", code="INSERT_NO_DATA")

        row = response.data[0]
        logger.info(f"Created order: {row['id']} for user: {user_id}")
        return row

    async def list_orders_for_user(self, user_id: int) -> list[dict[str, Any]]:
        try:
            response = await (
                self.client.table("orders")
                .select("*, flowers(name, image_url)")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .order("id", desc=True)
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to fetch orders: {e}",
                code="FETCH_ORDERS_FAILED",
                details={"user_id": user_id},
            ) from e

        return [_flatten_order(row) for row in response.data or []]

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    async def insert_session(
        self,
        session_id: str,
        user_id: int,
        user_name: str,
        expires_at: datetime,
    ) -> None:
        data = {
            "sid": session_id,
            "user_id": user_id,
            "user_name": user_name,
            "expires_at": expires_at.isoformat(),
        }

        try:
            await self.client.table("user_sessions").insert(data).execute()
        except Exception as e:
            raise DatastoreError(
                f"Failed to store session: {e}",
                code="INSERT_SESSION_FAILED",
            ) from e

    async def fetch_session(self, session_id: str) -> dict[str, Any] | None:
        try:
            response = await (
                self.client.table("user_sessions")
                .select("sid, user_id, user_name, expires_at")
                .eq("sid", session_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to fetch session: {e}",
                code="FETCH_SESSION_FAILED",
            ) from e

        rows = response.data or []
        if not rows:
            return None

        row = rows[0]
        return {
            "session_id": row["sid"],
            "user_id": row["user_id"],
            "user_name": row["user_name"],
            "expires_at": row["expires_at"],
        }

    async def delete_session(self, session_id: str) -> None:
        try:
            await (
                self.client.table("user_sessions")
                .delete()
                .eq("sid", session_id)
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to delete session: {e}",
                code="DELETE_SESSION_FAILED",
            ) from e

    async def delete_expired_sessions(self, now: datetime) -> int:
        try:
            response = await (
                self.client.table("user_sessions")
                .delete()
                .lte("expires_at", now.isoformat())
                .execute()
            )
        except Exception as e:
            raise DatastoreError(
                f"Failed to prune sessions: {e}",
                code="PRUNE_SESSIONS_FAILED",
            ) from e

        return len(response.data or [])
