"""User and authentication models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class User(BaseModel):
    """A registered blog author.

    ``password_hash`` is excluded from serialization and repr so a User
    can never leak it through a response or a log line.
    """

    id: UUID
    username: str
    name: str
    email: str
    password_hash: str = Field(default="", exclude=True, repr=False)
    created_at: datetime
    updated_at: datetime


class AuthenticatedIdentity(BaseModel):
    """Minimal projection of a User exposed to route handlers."""

    id: UUID
    username: str
    name: str

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedIdentity":
        """Project a User down to its public identity fields."""
        return cls(id=user.id, username=user.username, name=user.name)


class RefreshTokenRecord(BaseModel):
    """The single live refresh token on record for a user."""

    user_id: UUID
    token: str = Field(repr=False)
    created_at: datetime
    updated_at: datetime
