"""Auth request and response models with validation."""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from blog_api.models.user import AuthenticatedIdentity

# 8-30 alphanumerics with at least one digit, one lowercase and one uppercase
PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])[a-zA-Z0-9]{8,30}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_password(v: str) -> str:
    if not PASSWORD_PATTERN.match(v):
        raise ValueError(
            "Password must be 8-30 letters or digits with at least one "
            "uppercase letter, one lowercase letter and one digit"
        )
    return v


class RegisterRequest(BaseModel):
    """Registration form.

    Attributes:
        username: Unique login name (5-30 chars)
        name: Display name (max 30 chars)
        email: Unique email address
        password: Plain-text password, see PASSWORD_PATTERN
        confirm_password: Optional repeat of password; must match when given
    """

    username: str = Field(..., min_length=5, max_length=30)
    name: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., max_length=254)
    password: str
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")

    model_config = {"populate_by_name": True}

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        """Require a basic local@domain.tld shape."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email must be a valid email address")
        return v

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        """Enforce the password policy."""
        return _check_password(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        """Require confirm_password to equal password when provided."""
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("confirmPassword must match password")
        return self


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str = Field(..., min_length=5, max_length=30)
    password: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return _check_password(v)


class TokenPair(BaseModel):
    """Access and refresh tokens issued together."""

    access_token: str = Field(repr=False)
    refresh_token: str = Field(repr=False)


class SessionResult(BaseModel):
    """Outcome of a successful register, login or refresh."""

    identity: AuthenticatedIdentity
    tokens: TokenPair


class AuthResponse(BaseModel):
    """Response body for session endpoints.

    Tokens travel in httpOnly cookies, never in the body.
    """

    user: Optional[AuthenticatedIdentity] = None
    auth: bool
