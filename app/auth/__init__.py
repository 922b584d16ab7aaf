# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Session-cookie authentication.
#
# Usage:
#   from app.auth import require_auth
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser = Depends(require_auth)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    CurrentUserDep,
    PreviousSessionDep,
    SessionDep,
    get_current_session,
    get_previous_session,
    require_auth,
)

__all__ = [
    "get_current_session",
    "get_previous_session",
    "require_auth",
    "CurrentUserDep",
    "SessionDep",
    "PreviousSessionDep",
]
