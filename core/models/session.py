# =============================================================================
# core/models/session.py - Session Schemas
# =============================================================================
# A session correlates an opaque client-held token with an authenticated user
# and a fixed expiry. There is no sliding renewal: expires_at is set once,
# at creation.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import CurrentUser


class SessionRecord(BaseModel):
    """
    Server-side session record.

    Example:
        {
            "session_id": "3q2-...",
            "user_id": 7,
            "user_name": "Rose Tyler",
            "expires_at": "2026-10-19T10:30:00Z"
        }
    """
    session_id: str = Field(..., description="Opaque session identifier")
    user_id: int = Field(..., description="Authenticated user")
    user_name: str = Field(..., description="User name at login time")
    expires_at: datetime = Field(..., description="Fixed expiry (timezone aware)")

    model_config = ConfigDict(frozen=True)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_user(self) -> CurrentUser:
        return CurrentUser(id=self.user_id, name=self.user_name)
