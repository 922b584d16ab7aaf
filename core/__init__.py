# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for users, flowers, orders and sessions
# - services/: Authenticator, catalog, orders and session storage
#
# Code in this package should NOT import from FastAPI.
# Services receive their datastore and session store through their
# constructors, which keeps them testable against in-memory fakes.
# =============================================================================
