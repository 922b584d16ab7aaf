# =============================================================================
# app/auth/cookies.py - Session Cookie Handling
# =============================================================================
# The cookie holds a signed token wrapping the session ID, never the user's
# identity itself. The token is an HS256 JWT keyed by SESSION_SECRET; one
# that fails verification (tampered, wrong key, past its exp) reads as
# "no session".
# =============================================================================

import logging

from fastapi import Response
from jose import JWTError, jwt

from app.config import Settings
from core.models.session import SessionRecord

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def encode_session_token(session: SessionRecord, secret: str) -> str:
    """Sign a session ID for the client to hold."""
    claims = {
        "sid": session.session_id,
        "exp": int(session.expires_at.timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_session_token(token: str, secret: str) -> str | None:
    """
    Verify a session token and extract the session ID.

    Returns:
        The session ID, or None if the token is invalid or expired
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug(f"Rejected session token: {e}")
        return None

    session_id = claims.get("sid")
    return session_id if isinstance(session_id, str) and session_id else None


def set_session_cookie(response: Response, session: SessionRecord, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=encode_session_token(session, settings.SESSION_SECRET),
        max_age=int(settings.session_ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )
