"""Domain models shared by use cases and repositories.

Plain dataclasses so use cases never touch ORM rows; repositories convert
between these and the SQLAlchemy models.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone


@dataclass
class TodoM:
    """A todo item as seen by the use cases."""

    content: str
    is_done: bool = False
    id: int | None = None
    created_date: datetime | None = None
    updated_date: datetime | None = None

    def mark_as_done(self) -> None:
        self.is_done = True
        self.updated_date = datetime.now(timezone.utc)

    def mark_as_undone(self) -> None:
        self.is_done = False
        self.updated_date = datetime.now(timezone.utc)


@dataclass
class UserWithoutPassword:
    """User data that is safe to hand back to controllers."""

    id: int
    username: str
    create_date: datetime | None = None
    updated_date: datetime | None = None
    last_login: datetime | None = None
    hash_refresh_token: str | None = None


@dataclass
class UserM(UserWithoutPassword):
    """A full user record, including the stored password hash."""

    password: str = ""

    def without_password(self) -> UserWithoutPassword:
        return UserWithoutPassword(
            **{f.name: getattr(self, f.name) for f in fields(UserWithoutPassword)}
        )
