"""FastAPI dependencies for authentication and session services."""

from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends, Request

from blog_api.config import get_settings
from blog_api.models.user import AuthenticatedIdentity
from blog_api.services.auth_guard import AuthGuard
from blog_api.services.password_hasher import PasswordHasher
from blog_api.services.session_manager import SessionManager
from blog_api.services.token_service import TokenConfig, TokenService

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def get_token_service() -> TokenService:
    """Build the token service from settings."""
    return TokenService(TokenConfig.from_settings(get_settings()))


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the process-wide password hasher.

    Shared so its placeholder hash is computed once, not per request.
    """
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_session_manager(
    tokens: TokenService = Depends(get_token_service),
) -> SessionManager:
    """Get a session manager wired to the Postgres stores."""
    return SessionManager(tokens=tokens, hasher=get_password_hasher())


def get_auth_guard(tokens: TokenService = Depends(get_token_service)) -> AuthGuard:
    return AuthGuard(tokens=tokens)


async def get_current_identity(
    request: Request,
    access_token: Optional[str] = Cookie(None, alias=ACCESS_COOKIE),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    guard: AuthGuard = Depends(get_auth_guard),
) -> AuthenticatedIdentity:
    """Authenticate the request from its token cookies.

    The resolved identity is also stored on ``request.state.identity`` for
    code that has the request but not the dependency.

    Raises:
        UnauthorizedError / TokenError: Rendered as 401 by the app handlers
    """
    identity = await guard.authenticate(access_token, refresh_token)
    request.state.identity = identity
    return identity
