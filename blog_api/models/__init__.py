"""Models package exports."""

from blog_api.models.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    SessionResult,
    TokenPair,
)
from blog_api.models.user import AuthenticatedIdentity, RefreshTokenRecord, User

__all__ = [
    "AuthResponse",
    "AuthenticatedIdentity",
    "LoginRequest",
    "RefreshTokenRecord",
    "RegisterRequest",
    "SessionResult",
    "TokenPair",
    "User",
]
