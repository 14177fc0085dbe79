"""Registration, login, logout and refresh of user sessions.

A user is either anonymous or holds exactly one session, represented by
the refresh token on record for them. Login and refresh both replace that
record, so a user signing in somewhere else ends the previous session on
its next refresh. Access tokens are never revoked; they simply run out.
"""

from typing import Optional
from uuid import UUID

import pydantic
import structlog

from blog_api.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    TokenError,
    UnauthorizedError,
    ValidationError,
)
from blog_api.models.auth import LoginRequest, RegisterRequest, SessionResult
from blog_api.models.user import AuthenticatedIdentity, User
from blog_api.services.password_hasher import PasswordHasher
from blog_api.services.refresh_token_store import RefreshTokenStore
from blog_api.services.token_service import TokenService
from blog_api.services.user_service import UserService

logger = structlog.get_logger(__name__)

BOTH_TAKEN_MESSAGE = (
    "Username & Email address already registered , "
    "please choose another username and email!"
)
EMAIL_TAKEN_MESSAGE = "Email already exists , please choose another email!"
USERNAME_TAKEN_MESSAGE = "Username already exists , please choose another username!"
INVALID_USERNAME_MESSAGE = "Invalid Username"
INVALID_PASSWORD_MESSAGE = "Invalid Password"


def _validate(model, **fields):
    try:
        return model(**fields)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ())) or "body"
        raise ValidationError(f"Field '{field}': {first.get('msg', 'invalid value')}")


class SessionManager:
    """Owns the session lifecycle and the write path to refresh tokens."""

    def __init__(
        self,
        tokens: TokenService,
        users: Optional[UserService] = None,
        refresh_tokens: Optional[RefreshTokenStore] = None,
        hasher: Optional[PasswordHasher] = None,
    ):
        self.tokens = tokens
        self.users = users or UserService()
        self.refresh_tokens = refresh_tokens or RefreshTokenStore()
        self.hasher = hasher or PasswordHasher()

    async def register(
        self,
        username: str,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> SessionResult:
        """Create an account and open its first session.

        Raises:
            ValidationError: Malformed fields
            ConflictError: Username and/or email already registered
            StoreFailureError: Persistence fault
        """
        form = _validate(
            RegisterRequest,
            username=username,
            name=name,
            email=email,
            password=password,
            confirm_password=confirm_password,
        )

        username_in_use = await self.users.exists_by_username(form.username)
        email_in_use = await self.users.exists_by_email(form.email)

        if username_in_use and email_in_use:
            raise ConflictError(BOTH_TAKEN_MESSAGE)
        if email_in_use:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)
        if username_in_use:
            raise ConflictError(USERNAME_TAKEN_MESSAGE)

        password_hash = await self.hasher.hash_async(form.password)
        user = await self.users.create_user(
            username=form.username,
            name=form.name,
            email=form.email,
            password_hash=password_hash,
        )

        result = await self._open_session(user)
        logger.info("user_registered", user_id=str(user.id), username=user.username)
        return result

    async def login(self, username: str, password: str) -> SessionResult:
        """Check credentials and open a session, replacing any prior one.

        The two failure messages differ, which lets a caller probe for
        existing usernames. Kept for compatibility with existing clients.

        Raises:
            ValidationError: Malformed fields
            InvalidCredentialsError: Unknown username or wrong password
        """
        form = _validate(LoginRequest, username=username, password=password)

        user = await self.users.get_by_username(form.username)

        if user is None:
            # Burn a comparison so unknown users cost as much as bad passwords
            await self.hasher.verify_async(form.password, None)
            logger.info("login_failed", reason="unknown_username")
            raise InvalidCredentialsError(INVALID_USERNAME_MESSAGE)

        if not await self.hasher.verify_async(form.password, user.password_hash):
            logger.info("login_failed", reason="wrong_password", user_id=str(user.id))
            raise InvalidCredentialsError(INVALID_PASSWORD_MESSAGE)

        result = await self._open_session(user)
        logger.info("user_logged_in", user_id=str(user.id), username=user.username)
        return result

    async def logout(self, refresh_token: Optional[str]) -> None:
        """End the session holding ``refresh_token``.

        Unknown or missing tokens are not an error. The caller is expected
        to discard both cookies; the access token stays valid until it
        expires.
        """
        if refresh_token:
            deleted = await self.refresh_tokens.delete_by_token(refresh_token)
        else:
            deleted = False
        logger.info("user_logged_out", session_found=deleted)

    async def refresh(self, refresh_token: Optional[str]) -> SessionResult:
        """Exchange a live refresh token for a new pair.

        The presented token is single use: on success it is replaced on
        record and any later attempt with it fails.

        Raises:
            UnauthorizedError: Token missing, invalid, expired or not live
            NotFoundError: The token's user no longer exists
        """
        if not refresh_token:
            logger.info("refresh_rejected", reason="missing_token")
            raise UnauthorizedError()

        try:
            user_id = UUID(self.tokens.verify_refresh(refresh_token))
        except (TokenError, ValueError) as e:
            logger.info("refresh_rejected", reason="invalid_token", error=str(e))
            raise UnauthorizedError() from e

        if not await self.refresh_tokens.find_live(user_id, refresh_token):
            logger.warning("refresh_rejected", reason="not_live", user_id=str(user_id))
            raise UnauthorizedError()

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning("refresh_rejected", reason="user_missing", user_id=str(user_id))
            raise NotFoundError()

        result = await self._open_session(user)
        logger.info("refresh_token_rotated", user_id=str(user_id))
        return result

    async def _open_session(self, user: User) -> SessionResult:
        tokens = self.tokens.issue_pair(str(user.id))
        await self.refresh_tokens.upsert(user.id, tokens.refresh_token)
        return SessionResult(
            identity=AuthenticatedIdentity.from_user(user),
            tokens=tokens,
        )
