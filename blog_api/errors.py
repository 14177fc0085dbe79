"""Error taxonomy for the auth/session core.

Every core operation raises one of these instead of letting infrastructure
exceptions leak. Each kind carries the HTTP status the boundary layer renders
it with; nothing below the exception handlers in ``blog_api.main`` looks at
status codes.
"""

from typing import Optional


class BlogApiError(Exception):
    """Base class for all errors the API knows how to render."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """Malformed input shape."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class ConflictError(BlogApiError):
    """Username or email already registered."""

    status_code = 409
    code = "CONFLICT"
    default_message = "Already registered"


class InvalidCredentialsError(BlogApiError):
    """Login mismatch: unknown username or wrong password."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class TokenError(BlogApiError):
    """A signed token could not be accepted."""

    status_code = 401
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class InvalidTokenError(TokenError):
    """Bad signature, wrong token class, or malformed token."""


class ExpiredTokenError(TokenError):
    """Signature is valid but the token's expiry has passed."""

    code = "TOKEN_EXPIRED"
    default_message = "Token has expired"


class UnauthorizedError(BlogApiError):
    """Request rejected by the auth guard or refresh liveness check."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class NotFoundError(BlogApiError):
    """User vanished between token issue and lookup."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "User not found"


class StoreFailureError(BlogApiError):
    """Persistence layer fault, opaque to the caller."""

    status_code = 500
    code = "STORE_FAILURE"
    default_message = "Internal Server Error"
