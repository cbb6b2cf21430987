from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from todoapi.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin


class User(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    """An account allowed to log in; passwords and refresh tokens are stored hashed."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    hash_refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
