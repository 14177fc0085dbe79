"""Persistence of the single live refresh token per user."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import structlog

from blog_api.database import connection
from blog_api.models.user import RefreshTokenRecord

logger = structlog.get_logger(__name__)


class RefreshTokenStore:
    """One refresh token record per user, keyed by user id.

    Writing a new token for a user overwrites the previous one, so every
    login or refresh invalidates whatever that user held before. Two
    concurrent writes for the same user race; the later write wins.
    """

    async def upsert(self, user_id: UUID, token: str) -> None:
        """Store ``token`` as the live refresh token for ``user_id``."""
        now = datetime.now(timezone.utc)

        async with connection("refresh_token_upsert") as conn:
            await conn.execute(
                """
                INSERT INTO refresh_tokens (user_id, token, created_at, updated_at)
                VALUES ($1, $2, $3, $3)
                ON CONFLICT (user_id)
                DO UPDATE SET token = EXCLUDED.token, updated_at = EXCLUDED.updated_at
                """,
                user_id,
                token,
                now,
            )

        logger.debug("refresh_token_stored", user_id=str(user_id))

    async def find_live(self, user_id: UUID, token: str) -> bool:
        """Check that ``token`` is exactly the token on record for the user.

        Args:
            user_id: Subject id taken from the verified token
            token: The raw refresh token presented by the client

        Returns:
            True if a record exists and its token string matches
        """
        record = await self.get(user_id)
        return record is not None and record.token == token

    async def get(self, user_id: UUID) -> Optional[RefreshTokenRecord]:
        """Load the refresh token record for a user, if any."""
        async with connection("refresh_token_get") as conn:
            row = await conn.fetchrow(
                """
                SELECT user_id, token, created_at, updated_at
                FROM refresh_tokens
                WHERE user_id = $1
                """,
                user_id,
            )

        if row is None:
            return None
        return RefreshTokenRecord(**dict(row))

    async def delete_by_token(self, token: str) -> bool:
        """Remove the record holding ``token``.

        Returns:
            True if a record was deleted, False if none matched
        """
        async with connection("refresh_token_delete") as conn:
            result = await conn.execute(
                "DELETE FROM refresh_tokens WHERE token = $1",
                token,
            )

        deleted = result == "DELETE 1"
        if not deleted:
            logger.info("refresh_token_delete_not_found")
        return deleted
