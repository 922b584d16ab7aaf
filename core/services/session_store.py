# =============================================================================
# core/services/session_store.py - Session Storage
# =============================================================================
# Session persistence behind one small interface:
#   create  - start a session for a user, expiring a fixed TTL from now
#   read    - look up a live session (expired ones read as absent)
#   destroy - end a session (logout)
#   expire  - purge every expired session
#
# Two implementations:
#   DatastoreSessionStore - rows in the user_sessions table
#   InMemorySessionStore  - a dict, for single-process deployments and tests
# =============================================================================

import asyncio
import logging
import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable

from core.models.session import SessionRecord
from lib.datastore import Datastore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(ABC):
    """
    Base class for session storage.

    Handles ID generation and expiry arithmetic; subclasses only move
    records in and out of their backing store.
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Clock = utcnow):
        self.ttl = ttl
        self.clock = clock

    async def create(self, user_id: int, user_name: str) -> SessionRecord:
        """Start a new session bound to the given user."""
        record = SessionRecord(
            session_id=new_session_id(),
            user_id=user_id,
            user_name=user_name,
            expires_at=self.clock() + self.ttl,
        )
        await self._save(record)
        logger.debug(f"Created session for user: {user_id}")
        return record

    async def read(self, session_id: str) -> SessionRecord | None:
        """
        Look up a session.

        Returns None if the session doesn't exist or has expired. Expired
        sessions found this way are destroyed on the spot.
        """
        record = await self._load(session_id)
        if record is None:
            return None
        if record.is_expired(self.clock()):
            await self.destroy(session_id)
            return None
        return record

    @abstractmethod
    async def destroy(self, session_id: str) -> None:
        """Remove a session. Destroying an unknown session is not an error."""

    @abstractmethod
    async def expire(self) -> int:
        """Purge all expired sessions. Returns how many were removed."""

    @abstractmethod
    async def _save(self, record: SessionRecord) -> None:
        ...

    @abstractmethod
    async def _load(self, session_id: str) -> SessionRecord | None:
        ...


class DatastoreSessionStore(SessionStore):
    """Sessions persisted in the datastore's user_sessions table."""

    def __init__(self, datastore: Datastore, ttl: timedelta = timedelta(hours=24), clock: Clock = utcnow):
        super().__init__(ttl=ttl, clock=clock)
        self.datastore = datastore

    async def destroy(self, session_id: str) -> None:
        await self.datastore.delete_session(session_id)

    async def expire(self) -> int:
        return await self.datastore.delete_expired_sessions(self.clock())

    async def _save(self, record: SessionRecord) -> None:
        await self.datastore.insert_session(
            session_id=record.session_id,
            user_id=record.user_id,
            user_name=record.user_name,
            expires_at=record.expires_at,
        )

    async def _load(self, session_id: str) -> SessionRecord | None:
        row = await self.datastore.fetch_session(session_id)
        return SessionRecord.model_validate(row) if row else None


class InMemorySessionStore(SessionStore):
    """
    Sessions kept in process memory.

    Lost on restart and not shared between worker processes.
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Clock = utcnow):
        super().__init__(ttl=ttl, clock=clock)
        self._records: dict[str, SessionRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    async def destroy(self, session_id: str) -> None:
        async with self._lock:
            self._records.pop(session_id, None)

    async def expire(self) -> int:
        now = self.clock()
        async with self._lock:
            expired = [sid for sid, r in self._records.items() if r.is_expired(now)]
            for sid in expired:
                del self._records[sid]
        return len(expired)

    async def _save(self, record: SessionRecord) -> None:
        async with self._lock:
            self._records[record.session_id] = record

    async def _load(self, session_id: str) -> SessionRecord | None:
        async with self._lock:
            return self._records.get(session_id)
