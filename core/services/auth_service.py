# =============================================================================
# core/services/auth_service.py - Authentication Business Logic
# =============================================================================
# Signup, login, logout and "who am I", on top of the users table and a
# SessionStore. Cookie handling stays in the app layer; this service only
# hands back the SessionRecord to bind to the response.
#
# Datastore failures propagate as DatastoreError for the router to log and
# map to a 500.
# =============================================================================

import asyncio
import logging

from app.exceptions import (
    AuthError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    ValidationError,
)
from core.models.session import SessionRecord
from core.models.user import CurrentUser, UserPublic
from core.services.session_store import SessionStore
from lib.datastore import Datastore, UniqueViolationError
from lib.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Service for account and session operations.

    Provides a clean interface between API routes and the credential and
    session stores.
    """

    def __init__(
        self,
        datastore: Datastore,
        sessions: SessionStore,
        bcrypt_rounds: int = 10,
    ):
        self.datastore = datastore
        self.sessions = sessions
        self.bcrypt_rounds = bcrypt_rounds

    async def signup(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        previous_session_id: str | None = None,
    ) -> tuple[UserPublic, SessionRecord]:
        """
        Register a new user and log them in.

        Args:
            name: Display name
            email: Login email, must not be registered yet
            password: Plaintext password, at least 6 characters
            previous_session_id: Session the client already holds, if any;
                it is destroyed and replaced

        Returns:
            (public user projection, new session)

        Raises:
            ValidationError: If a field is missing or the password is too short
            EmailAlreadyRegisteredError: If the email is taken
        """
        name = (name or "").strip()
        email = (email or "").strip()

        if not name or not email or not password:
            raise ValidationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if await self.datastore.fetch_user_by_email(email):
            raise EmailAlreadyRegisteredError()

        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds
        )

        try:
            row = await self.datastore.insert_user(name, email, password_hash)
        except UniqueViolationError:
            # Lost a race with a concurrent signup for the same email
            raise EmailAlreadyRegisteredError()

        user = UserPublic.model_validate(row)
        logger.info(f"User signed up: {user.id}")

        session = await self._start_session(user, previous_session_id)
        return user, session

    async def login(
        self,
        email: str | None,
        password: str | None,
        previous_session_id: str | None = None,
    ) -> tuple[UserPublic, SessionRecord]:
        """
        Verify credentials and start a session.

        An unknown email and a wrong password fail identically.

        Raises:
            ValidationError: If email or password is missing
            InvalidCredentialsError: If the credentials don't match
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        row = await self.datastore.fetch_user_by_email(email)
        if row is None:
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(verify_password, password, row["password_hash"])
        if not valid:
            raise InvalidCredentialsError()

        user = UserPublic(id=row["id"], name=row["name"], email=row["email"])
        logger.info(f"User logged in: {user.id}")

        session = await self._start_session(user, previous_session_id)
        return user, session

    async def logout(self, session_id: str | None) -> None:
        """
        Destroy the caller's session.

        Logging out without a session is a no-op.
        """
        if session_id is None:
            return
        await self.sessions.destroy(session_id)

    @staticmethod
    def current_user(session: SessionRecord | None) -> CurrentUser:
        """
        Identity of the logged-in user, from the session alone.

        Raises:
            AuthError: If there is no live session
        """
        if session is None:
            raise AuthError("Not logged in")
        return session.to_user()

    async def _start_session(
        self,
        user: UserPublic,
        previous_session_id: str | None,
    ) -> SessionRecord:
        if previous_session_id:
            await self.sessions.destroy(previous_session_id)
        return await self.sessions.create(user.id, user.name)
