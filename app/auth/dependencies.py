# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Resolves the session cookie to a live SessionRecord and provides the
# `require_auth` gate for protected routes.
#
# Usage:
#   from app.auth import require_auth
#   from core.models import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser = Depends(require_auth)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Request

from app.auth.cookies import decode_session_token
from app.dependencies import ContextDep
from app.exceptions import AuthError, InternalError
from core.models.session import SessionRecord
from core.models.user import CurrentUser
from lib.datastore import DatastoreError

logger = logging.getLogger(__name__)


async def get_current_session(
    request: Request,
    context: ContextDep,
) -> SessionRecord | None:
    """
    Look up the caller's session from the session cookie.

    Returns None if there is no cookie, the token doesn't verify, or the
    session is unknown or expired.

    Raises:
        InternalError: If the session store can't be read
    """
    token = request.cookies.get(context.settings.SESSION_COOKIE_NAME)
    if not token:
        return None

    session_id = decode_session_token(token, context.settings.SESSION_SECRET)
    if session_id is None:
        return None

    try:
        return await context.sessions.read(session_id)
    except DatastoreError as e:
        logger.error(f"Session lookup failed: {e}")
        raise InternalError("Failed to load session") from e


async def get_previous_session(
    request: Request,
    context: ContextDep,
) -> SessionRecord | None:
    """
    Best-effort lookup of the session a signup/login replaces.

    A session store failure is logged and read as "no session", so a
    stale cookie can't block logging in. The unread session is left to
    expire on its own.
    """
    try:
        return await get_current_session(request, context)
    except InternalError:
        logger.warning("Ignoring unreadable previous session")
        return None


async def require_auth(
    session: Annotated[SessionRecord | None, Depends(get_current_session)],
) -> CurrentUser:
    """
    Gate for routes that need a logged-in user.

    Raises:
        AuthError: 401 if there is no live session
    """
    if session is None:
        raise AuthError("Please log in")
    return session.to_user()


# Type aliases for dependency injection
SessionDep = Annotated[SessionRecord | None, Depends(get_current_session)]
PreviousSessionDep = Annotated[SessionRecord | None, Depends(get_previous_session)]
CurrentUserDep = Annotated[CurrentUser, Depends(require_auth)]
