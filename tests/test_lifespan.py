# =============================================================================
# tests/test_lifespan.py - App Wiring and Background Task Tests
# =============================================================================
# This module contains tests for:
# - Session backend selection (SESSION_BACKEND)
# - The expired-session pruner started by the lifespan
# =============================================================================

import asyncio
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from app.dependencies import build_context, build_session_store
from app.main import create_app, session_pruner
from core.services import DatastoreSessionStore, InMemorySessionStore
from tests.fakes import InMemoryDatastore


class TestSessionBackend:
    """SESSION_BACKEND picks the session store."""

    def test_datastore_backend(self, settings, datastore):
        store = build_session_store(settings, datastore)

        assert isinstance(store, DatastoreSessionStore)
        assert store.ttl == timedelta(hours=24)

    def test_memory_backend(self, settings, datastore):
        memory_settings = settings.model_copy(update={"SESSION_BACKEND": "memory"})

        store = build_session_store(memory_settings, datastore)

        assert isinstance(store, InMemorySessionStore)

    def test_injected_store_wins(self, settings, datastore):
        store = InMemorySessionStore()

        context = build_context(settings, datastore, sessions=store)

        assert context.sessions is store
        assert context.auth.sessions is store

    def test_memory_backend_end_to_end(self, settings, datastore):
        store = InMemorySessionStore()
        app = create_app(settings=settings, datastore=datastore, session_store=store)

        with TestClient(app) as client:
            client.post(
                "/api/auth/signup",
                json={"name": "Rose", "email": "rose@example.com", "password": "bad-wolf"},
            )
            me = client.get("/api/auth/me")

        assert me.status_code == 200
        assert len(store) == 1
        assert datastore.sessions == {}


class TestSessionPruner:
    """The background task purges expired sessions until shutdown."""

    def test_prunes_and_stops(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        clock = lambda: now  # noqa: E731
        store = InMemorySessionStore(ttl=timedelta(seconds=-1), clock=clock)

        async def scenario():
            await store.create(1, "Rose")
            shutdown = asyncio.Event()
            task = asyncio.create_task(session_pruner(store, 0.01, shutdown))
            await asyncio.sleep(0.1)
            shutdown.set()
            await asyncio.wait_for(task, timeout=1)

        asyncio.run(scenario())

        assert len(store) == 0

    def test_survives_datastore_errors(self):
        datastore = InMemoryDatastore()
        datastore.reachable = False
        store = DatastoreSessionStore(datastore)

        async def scenario():
            shutdown = asyncio.Event()
            task = asyncio.create_task(session_pruner(store, 0.01, shutdown))
            await asyncio.sleep(0.05)
            assert not task.done()
            shutdown.set()
            await asyncio.wait_for(task, timeout=1)

        asyncio.run(scenario())
