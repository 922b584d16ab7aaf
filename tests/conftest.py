# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds the app around an in-memory datastore (no network)
# - Provides a logged-out TestClient and helpers to sign users up
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from tests.fakes import InMemoryDatastore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_flowers():
    """Seed catalog, deliberately inserted out of id order."""
    return [
        {
            "id": 3,
            "name": "Sunflower",
            "price": Decimal("4.00"),
            "image_url": "/images/sunflower.jpg",
            "description": "Bright and tall.",
        },
        {
            "id": 1,
            "name": "Red Rose",
            "price": Decimal("12.50"),
            "image_url": "/images/red-rose.jpg",
            "description": "A classic.",
        },
        {
            "id": 2,
            "name": "White Tulip",
            "price": Decimal("6.25"),
            "image_url": "/images/white-tulip.jpg",
            "description": None,
        },
    ]


@pytest.fixture
def settings():
    """Settings tuned for tests: cheap bcrypt, instant readiness, no pruner."""
    return Settings(
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        SESSION_SECRET="test-session-secret-0123456789",
        BCRYPT_ROUNDS=4,
        DB_READY_RETRIES=2,
        DB_READY_DELAY_SECONDS=0,
        SESSION_PRUNE_INTERVAL_SECONDS=0,
        SESSION_BACKEND="datastore",
    )


@pytest.fixture
def datastore(sample_flowers):
    return InMemoryDatastore(flowers=sample_flowers)


@pytest.fixture
def app(settings, datastore):
    return create_app(settings=settings, datastore=datastore)


@pytest.fixture
def client(app):
    """TestClient with the lifespan running (readiness wait included)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client):
    """Sign a user up on the shared client; the client keeps the cookie."""

    def _signup(name="Rose Tyler", email="rose@example.com", password="bad-wolf"):
        response = client.post(
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _signup
