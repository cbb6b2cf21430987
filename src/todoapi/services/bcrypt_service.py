"""Password and refresh-token hashing backed by passlib's bcrypt scheme."""

from __future__ import annotations

import asyncio

from passlib.context import CryptContext


class BcryptService:
    """Hash and verify secrets with bcrypt.

    bcrypt is deliberately slow, so both operations run in a worker thread
    to keep the event loop responsive.

    Args:
        rounds: bcrypt cost factor.
    """

    def __init__(self, rounds: int = 10) -> None:
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, value: str) -> str:
        return await asyncio.to_thread(self.context.hash, value)

    async def compare(self, value: str, hashed: str | None) -> bool:
        """Return whether ``value`` matches ``hashed``; a missing or malformed hash never matches."""
        if not value or not hashed:
            return False
        try:
            return await asyncio.to_thread(self.context.verify, value, hashed)
        except ValueError:
            return False
