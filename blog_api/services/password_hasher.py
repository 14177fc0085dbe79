"""Bcrypt password hashing."""

import asyncio
from typing import Optional

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way salted password hashing and verification.

    bcrypt is CPU-bound; the ``*_async`` variants run it on the event
    loop's default executor so unrelated requests keep being served.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # Stands in for the stored hash of a user that does not exist
        self._placeholder_hash = bcrypt.hashpw(
            b"placeholder-password", bcrypt.gensalt(rounds=rounds)
        )

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain-text password to hash

        Returns:
            Bcrypt hash string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Verify a password against a bcrypt hash.

        A missing, empty or malformed hash is a failed verification, never
        an exception. In that case a comparison against a placeholder hash
        of the same cost still runs, so an unknown user takes as long to
        reject as a wrong password.

        Args:
            password: Plain-text password to check
            password_hash: Bcrypt hash to verify against, or None

        Returns:
            True if the password matches, False otherwise
        """
        candidate = password.encode("utf-8")

        try:
            if not password_hash:
                bcrypt.checkpw(candidate, self._placeholder_hash)
                return False
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            # Malformed hash, or a password bcrypt refuses outright
            return False

    async def hash_async(self, password: str) -> str:
        """Hash a password off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.hash, password)

    async def verify_async(self, password: str, password_hash: Optional[str]) -> bool:
        """Verify a password off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.verify, password, password_hash)
