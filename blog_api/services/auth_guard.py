"""Request authentication gate for protected routes."""

from typing import Optional
from uuid import UUID

import structlog

from blog_api.errors import InvalidTokenError, UnauthorizedError
from blog_api.models.user import AuthenticatedIdentity
from blog_api.services.token_service import TokenService
from blog_api.services.user_service import UserService

logger = structlog.get_logger(__name__)


class AuthGuard:
    """Resolve an inbound token pair to an authenticated identity.

    Only the access token is verified; the refresh token just has to be
    present. An expired access token is rejected like any other bad one;
    the client must call refresh itself.
    """

    def __init__(self, tokens: TokenService, users: Optional[UserService] = None):
        self.tokens = tokens
        self.users = users or UserService()

    async def authenticate(
        self,
        access_token: Optional[str],
        refresh_token: Optional[str],
    ) -> AuthenticatedIdentity:
        """Verify the pair and look up its user.

        Raises:
            UnauthorizedError: A token is missing or the user no longer exists
            InvalidTokenError: The access token is forged or malformed
            ExpiredTokenError: The access token has expired
        """
        if not access_token or not refresh_token:
            logger.info("auth_guard_rejected", reason="missing_token")
            raise UnauthorizedError()

        subject = self.tokens.verify_access(access_token)
        try:
            user_id = UUID(subject)
        except ValueError:
            raise InvalidTokenError("Invalid access token: malformed subject")

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning("auth_guard_rejected", reason="user_missing", user_id=subject)
            raise UnauthorizedError()

        return AuthenticatedIdentity.from_user(user)
