"""User persistence on top of an async SQLAlchemy session."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.domain.model import UserM
from todoapi.models.user import User


def to_user_model(row: User) -> UserM:
    return UserM(
        id=row.id,
        username=row.username,
        password=row.password,
        create_date=row.created_date,
        updated_date=row.updated_date,
        last_login=row.last_login,
        hash_refresh_token=row.hash_refresh_token,
    )


class DatabaseUserRepository:
    """Reads users and records login activity in the ``users`` table.

    Args:
        db: Async SQLAlchemy session for database operations.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_by_username(self, username: str) -> UserM | None:
        result = await self.db.execute(select(User).where(User.username == username))
        row = result.scalar_one_or_none()
        return to_user_model(row) if row is not None else None

    async def update_last_login(self, username: str) -> None:
        await self.db.execute(
            update(User)
            .where(User.username == username)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.db.commit()

    async def update_refresh_token(self, username: str, refresh_token: str | None) -> None:
        """Store the hashed refresh token, or clear it with ``None``."""
        await self.db.execute(
            update(User)
            .where(User.username == username)
            .values(hash_refresh_token=refresh_token)
        )
        await self.db.commit()
