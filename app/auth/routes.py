# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup, login, logout and "me". Successful signup/login sets the session
# cookie; logout clears it.
# =============================================================================

import logging

from fastapi import APIRouter, Response, status

from app.auth.cookies import clear_session_cookie, set_session_cookie
from app.auth.dependencies import PreviousSessionDep, SessionDep
from app.dependencies import ContextDep
from app.exceptions import InternalError
from core.models.user import CurrentUser, LoginRequest, SignupRequest, UserPublic
from lib.datastore import DatastoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    response: Response,
    context: ContextDep,
    current: PreviousSessionDep,
) -> UserPublic:
    """
    Create an account and log in.

    Raises:
        400: If a field is missing or the password is shorter than 6 characters
        409: If the email is already registered
    """
    try:
        user, session = await context.auth.signup(
            payload.name,
            payload.email,
            payload.password,
            previous_session_id=current.session_id if current else None,
        )
    except DatastoreError as e:
        logger.error(f"Signup error: {e}")
        raise InternalError("Signup failed") from e

    set_session_cookie(response, session, context.settings)
    return user


@router.post("/login", response_model=UserPublic)
async def login(
    payload: LoginRequest,
    response: Response,
    context: ContextDep,
    current: PreviousSessionDep,
) -> UserPublic:
    """
    Log in with email and password.

    Raises:
        400: If email or password is missing
        401: If the credentials don't match (same response for unknown email)
    """
    try:
        user, session = await context.auth.login(
            payload.email,
            payload.password,
            previous_session_id=current.session_id if current else None,
        )
    except DatastoreError as e:
        logger.error(f"Login error: {e}")
        raise InternalError("Login failed") from e

    set_session_cookie(response, session, context.settings)
    return user


@router.post("/logout")
async def logout(
    response: Response,
    context: ContextDep,
    current: SessionDep,
) -> dict:
    """
    Destroy the current session and clear the cookie.

    Raises:
        500: If the session store can't destroy the session
    """
    try:
        await context.auth.logout(current.session_id if current else None)
    except DatastoreError as e:
        logger.error(f"Logout error: {e}")
        raise InternalError("Logout failed") from e

    clear_session_cookie(response, context.settings)
    return {"message": "Logged out"}


@router.get("/me", response_model=CurrentUser)
async def me(context: ContextDep, current: SessionDep) -> CurrentUser:
    """
    Get the logged-in user's id and name.

    Answered from the session alone.

    Raises:
        401: If not logged in
    """
    return context.auth.current_user(current)
