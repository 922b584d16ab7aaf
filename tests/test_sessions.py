# =============================================================================
# tests/test_sessions.py - Session Store and Cookie Tests
# =============================================================================
# This module contains tests for:
# - InMemorySessionStore and DatastoreSessionStore (create/read/destroy/expire)
# - Signed session tokens carried in the cookie
#
# Async store methods are driven with asyncio.run.
# =============================================================================

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from app.auth.cookies import decode_session_token, encode_session_token
from core.models.session import SessionRecord
from core.services.session_store import DatastoreSessionStore, InMemorySessionStore
from tests.fakes import InMemoryDatastore


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(params=["memory", "datastore"])
def store(request, clock):
    """Both session backends, run through the same tests."""
    if request.param == "memory":
        return InMemorySessionStore(ttl=timedelta(hours=24), clock=clock)
    return DatastoreSessionStore(InMemoryDatastore(), ttl=timedelta(hours=24), clock=clock)


# =============================================================================
# SessionStore Tests
# =============================================================================

class TestSessionStore:
    """Behaviour shared by every SessionStore."""

    def test_create_and_read(self, store, clock):
        async def scenario():
            record = await store.create(7, "Rose")
            return record, await store.read(record.session_id)

        record, loaded = asyncio.run(scenario())

        assert loaded == record
        assert record.user_id == 7
        assert record.user_name == "Rose"
        assert record.expires_at == clock.now + timedelta(hours=24)

    def test_session_ids_are_unique(self, store):
        async def scenario():
            first = await store.create(7, "Rose")
            second = await store.create(7, "Rose")
            return first, second

        first, second = asyncio.run(scenario())

        assert first.session_id != second.session_id

    def test_read_unknown(self, store):
        assert asyncio.run(store.read("no-such-session")) is None

    def test_destroy(self, store):
        async def scenario():
            record = await store.create(7, "Rose")
            await store.destroy(record.session_id)
            return await store.read(record.session_id)

        assert asyncio.run(scenario()) is None

    def test_destroy_unknown_is_noop(self, store):
        asyncio.run(store.destroy("no-such-session"))

    def test_fixed_expiry(self, store, clock):
        """Reading a session does not extend it."""
        async def scenario():
            record = await store.create(7, "Rose")
            clock.advance(hours=23)
            still_live = await store.read(record.session_id)
            clock.advance(hours=1)
            expired = await store.read(record.session_id)
            return still_live, expired

        still_live, expired = asyncio.run(scenario())

        assert still_live is not None
        assert expired is None

    def test_expire_purges_only_expired(self, store, clock):
        async def scenario():
            old = await store.create(1, "Old")
            clock.advance(hours=12)
            new = await store.create(2, "New")
            clock.advance(hours=12)
            removed = await store.expire()
            return removed, await store.read(old.session_id), await store.read(new.session_id)

        removed, old, new = asyncio.run(scenario())

        assert removed == 1
        assert old is None
        assert new is not None


class TestDatastoreSessionStore:
    """Checks specific to the datastore-backed store."""

    def test_expired_read_deletes_row(self, clock):
        datastore = InMemoryDatastore()
        store = DatastoreSessionStore(datastore, ttl=timedelta(minutes=5), clock=clock)

        async def scenario():
            record = await store.create(7, "Rose")
            clock.advance(minutes=5)
            await store.read(record.session_id)

        asyncio.run(scenario())

        assert datastore.sessions == {}


# =============================================================================
# Session Token Tests
# =============================================================================

class TestSessionToken:
    """Tests for the signed cookie value."""

    SECRET = "test-session-secret-0123456789"

    def _record(self, expires_at=None):
        return SessionRecord(
            session_id="sid-123",
            user_id=7,
            user_name="Rose",
            expires_at=expires_at or datetime.now(timezone.utc) + timedelta(hours=1),
        )

    def test_round_trip(self):
        token = encode_session_token(self._record(), self.SECRET)

        assert token.count(".") == 2
        assert decode_session_token(token, self.SECRET) == "sid-123"

    def test_wrong_secret(self):
        token = encode_session_token(self._record(), self.SECRET)

        assert decode_session_token(token, "another-secret-0123456789") is None

    def test_tampered_token(self):
        token = encode_session_token(self._record(), self.SECRET)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert decode_session_token(tampered, self.SECRET) is None

    def test_expired_token(self):
        record = self._record(expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        token = encode_session_token(record, self.SECRET)

        assert decode_session_token(token, self.SECRET) is None

    def test_garbage(self):
        assert decode_session_token("not-a-token", self.SECRET) is None
