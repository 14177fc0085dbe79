"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
import structlog

from blog_api.api.dependencies import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    get_current_identity,
    get_session_manager,
)
from blog_api.config import get_settings
from blog_api.models.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    SessionResult,
    TokenPair,
)
from blog_api.models.user import AuthenticatedIdentity
from blog_api.services.session_manager import SessionManager

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Auth"])


def _set_token_cookies(response: Response, tokens: TokenPair) -> None:
    """Hand both tokens to the client as httpOnly cookies."""
    settings = get_settings()
    for name, value in (
        (ACCESS_COOKIE, tokens.access_token),
        (REFRESH_COOKIE, tokens.refresh_token),
    ):
        response.set_cookie(
            name,
            value,
            max_age=settings.cookie_max_age_seconds,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )


def _session_response(response: Response, result: SessionResult) -> AuthResponse:
    _set_token_cookies(response, result.tokens)
    return AuthResponse(user=result.identity, auth=True)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    """Register a new user and sign them in.

    Raises:
        400: Malformed fields
        409: Username and/or email already registered
    """
    result = await sessions.register(
        username=request.username,
        name=request.name,
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
    )
    return _session_response(response, result)


@router.post("/login")
async def login(
    request: LoginRequest,
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    """Login with username and password.

    Raises:
        401: Unknown username or wrong password
    """
    result = await sessions.login(request.username, request.password)
    return _session_response(response, result)


@router.post("/logout")
async def logout(
    response: Response,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    """Drop the caller's refresh token and clear both cookies."""
    await sessions.logout(refresh_token)

    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)

    logger.info("logout_completed", user_id=str(identity.id))
    return AuthResponse(user=None, auth=False)


@router.get("/refresh")
async def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    """Rotate the refresh token and issue a new access token.

    Raises:
        401: Refresh token missing, invalid, expired, or no longer live
    """
    result = await sessions.refresh(refresh_token)
    return _session_response(response, result)


@router.get("/me")
async def get_me(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
) -> AuthenticatedIdentity:
    """Get the current authenticated identity."""
    return identity
