"""User store backed by Postgres."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

import asyncpg
import structlog

from blog_api.database import connection
from blog_api.errors import ConflictError
from blog_api.models.user import User

logger = structlog.get_logger(__name__)

_USER_COLUMNS = "id, username, name, email, password_hash, created_at, updated_at"


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserService:
    """Lookups, existence checks and creation of users.

    Usernames and emails are matched exactly. Passwords arrive here
    already hashed; this service never sees plain text.
    """

    async def exists_by_username(self, username: str) -> bool:
        async with connection("exists_by_username") as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM users WHERE username = $1)",
                username,
            )

    async def exists_by_email(self, email: str) -> bool:
        async with connection("exists_by_email") as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM users WHERE email = $1)",
                email,
            )

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username.

        Args:
            username: Username to look up

        Returns:
            User (with password_hash populated) or None if not found
        """
        async with connection("get_by_username") as conn:
            row = await conn.fetchrow(
                f"SELECT {_USER_COLUMNS} FROM users WHERE username = $1",
                username,
            )

        if row is None:
            return None
        return _row_to_user(row)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by UUID.

        Args:
            user_id: User UUID

        Returns:
            User or None if not found
        """
        async with connection("get_by_id") as conn:
            row = await conn.fetchrow(
                f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1",
                user_id,
            )

        if row is None:
            return None
        return _row_to_user(row)

    async def create_user(
        self,
        username: str,
        name: str,
        email: str,
        password_hash: str,
    ) -> User:
        """Insert a new user.

        Args:
            username: Unique username
            name: Display name
            email: Unique email address
            password_hash: Bcrypt hash of the user's password

        Returns:
            Created User model

        Raises:
            ConflictError: If the username or email was taken concurrently
            StoreFailureError: If the database insert fails
        """
        user_id = uuid4()
        now = datetime.now(timezone.utc)

        async with connection("create_user") as conn:
            try:
                await conn.execute(
                    """
                    INSERT INTO users (id, username, name, email, password_hash, created_at, updated_at)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    """,
                    user_id,
                    username,
                    name,
                    email,
                    password_hash,
                    now,
                    now,
                )
            except asyncpg.UniqueViolationError:
                logger.warning("user_create_conflict", username=username)
                raise ConflictError("Username or email already registered")

        logger.info("user_created", user_id=str(user_id), username=username)

        return User(
            id=user_id,
            username=username,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
