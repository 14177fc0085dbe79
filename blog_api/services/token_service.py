"""Signing and verification of access and refresh tokens."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from blog_api.config import Settings
from blog_api.errors import ExpiredTokenError, InvalidTokenError
from blog_api.models.auth import TokenPair

logger = structlog.get_logger(__name__)

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenConfig:
    """Secrets and lifetimes for both token classes.

    Each class has its own secret so that leaking one cannot be used to
    forge the other.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=30)
    refresh_ttl: timedelta = timedelta(minutes=60)
    algorithm: str = "HS256"

    def __post_init__(self):
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Token secrets must not be empty")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens must use distinct secrets")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            access_secret=settings.access_token_secret,
            refresh_secret=settings.refresh_token_secret,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(minutes=settings.refresh_token_expire_minutes),
            algorithm=settings.jwt_algorithm,
        )


class TokenService:
    """Stateless JWT signing and verification.

    Verification only proves authenticity and freshness. Whether a refresh
    token is still the live one on record is the RefreshTokenStore's call.
    """

    def __init__(self, config: TokenConfig):
        self.config = config

    def sign_access(self, subject_id: str, ttl: Optional[timedelta] = None) -> str:
        """Create a signed access token for a subject."""
        if ttl is None:
            ttl = self.config.access_ttl
        return self._sign(ACCESS, subject_id, ttl)

    def sign_refresh(self, subject_id: str, ttl: Optional[timedelta] = None) -> str:
        """Create a signed refresh token for a subject."""
        if ttl is None:
            ttl = self.config.refresh_ttl
        return self._sign(REFRESH, subject_id, ttl)

    def issue_pair(self, subject_id: str) -> TokenPair:
        """Sign a fresh access/refresh pair for a subject."""
        return TokenPair(
            access_token=self.sign_access(subject_id),
            refresh_token=self.sign_refresh(subject_id),
        )

    def verify_access(self, token: str) -> str:
        """Verify an access token and return its subject id.

        Raises:
            ExpiredTokenError: Signature valid, expiry elapsed
            InvalidTokenError: Anything else wrong with the token
        """
        return self._verify(ACCESS, token)

    def verify_refresh(self, token: str) -> str:
        """Verify a refresh token and return its subject id.

        Raises:
            ExpiredTokenError: Signature valid, expiry elapsed
            InvalidTokenError: Anything else wrong with the token
        """
        return self._verify(REFRESH, token)

    def _secret(self, token_type: str) -> str:
        if token_type == ACCESS:
            return self.config.access_secret
        return self.config.refresh_secret

    def _sign(self, token_type: str, subject_id: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "type": token_type,
            "jti": secrets.token_hex(8),
            "iat": now,
            "exp": now + ttl,
        }
        token = jwt.encode(payload, self._secret(token_type), algorithm=self.config.algorithm)
        logger.debug(
            "token_signed",
            kind=token_type,
            subject_id=str(subject_id),
            expires_seconds=int(ttl.total_seconds()),
        )
        return token

    def _verify(self, token_type: str, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret(token_type),
                algorithms=[self.config.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError(f"{token_type.capitalize()} token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid {token_type} token: {e}")

        if payload.get("type") != token_type:
            raise InvalidTokenError(f"Invalid {token_type} token: wrong token type")

        return payload["sub"]
