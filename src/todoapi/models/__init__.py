from todoapi.models.base import Base, IntegerPrimaryKeyMixin, TimestampMixin
from todoapi.models.todo import Todo
from todoapi.models.user import User

__all__ = [
    "Base",
    "IntegerPrimaryKeyMixin",
    "TimestampMixin",
    "Todo",
    "User",
]
