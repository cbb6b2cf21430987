from sqlalchemy import Boolean, String, false
from sqlalchemy.orm import Mapped, mapped_column

from todoapi.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin


class Todo(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    """A single entry of the todo list."""

    __tablename__ = "todos"

    content: Mapped[str] = mapped_column(String(255), nullable=False)
    is_done: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
