"""Services package exports."""

from blog_api.services.auth_guard import AuthGuard
from blog_api.services.logging_service import configure_logging
from blog_api.services.password_hasher import PasswordHasher
from blog_api.services.refresh_token_store import RefreshTokenStore
from blog_api.services.session_manager import SessionManager
from blog_api.services.token_service import TokenConfig, TokenService
from blog_api.services.user_service import UserService

__all__ = [
    "AuthGuard",
    "PasswordHasher",
    "RefreshTokenStore",
    "SessionManager",
    "TokenConfig",
    "TokenService",
    "UserService",
    "configure_logging",
]
