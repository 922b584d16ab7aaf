# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Flower Shop API:
# - test_models.py: Pydantic model validation
# - test_passwords.py / test_sessions.py: Hashing, session store, cookies
# - test_services.py: Service layer against the in-memory datastore
# - test_supabase_client.py: Datastore wrapper with a mocked Supabase client
# - test_api_*.py: HTTP-level tests through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
