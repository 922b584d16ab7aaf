# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for account operations:
# - SignupRequest / LoginRequest: Inputs for the auth endpoints
# - UserPublic: The public projection of a user (never the password hash)
# - CurrentUser: Identity carried by a session
#
# Request fields are optional at the schema level so that a missing field is
# reported by the service as a 400, not rejected by FastAPI as a 422.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """
    Body of POST /api/auth/signup.

    Example:
        {
            "name": "Rose Tyler",
            "email": "rose@example.com",
            "password": "bad-wolf"
        }
    """
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Login email (unique)")
    password: str | None = Field(default=None, description="At least 6 characters")


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""
    email: str | None = Field(default=None, description="Login email")
    password: str | None = Field(default=None, description="Plaintext password")


class UserPublic(BaseModel):
    """
    Public projection of a user.

    Returned by signup and login. Excludes password_hash.
    """
    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login email")

    model_config = ConfigDict(frozen=True)


class CurrentUser(BaseModel):
    """
    Identity of the logged-in user, read from the session alone.

    This is the minimal user info available without querying the users table.
    """
    id: int
    name: str

    model_config = ConfigDict(frozen=True)
