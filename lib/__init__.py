# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - datastore.py: The Datastore interface and its error types
# - supabase_client.py: Datastore implementation on the async Supabase client
# - passwords.py: bcrypt hashing and verification
# - readiness.py: Startup wait for the datastore
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.datastore import (
    Datastore,
    DatastoreError,
    DatastoreUnavailableError,
    UniqueViolationError,
)
from lib.passwords import hash_password, verify_password
from lib.readiness import wait_for_datastore

__all__ = [
    # Datastore
    "Datastore",
    "DatastoreError",
    "DatastoreUnavailableError",
    "UniqueViolationError",
    # Passwords
    "hash_password",
    "verify_password",
    # Readiness
    "wait_for_datastore",
]
