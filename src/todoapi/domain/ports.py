"""Boundary protocols between the use cases and their collaborators.

Use cases depend on these structural types only; the database repositories,
passlib/jose adapters and the settings object satisfy them, and tests pass
mocks in their place.
"""

from typing import Any, Protocol

from todoapi.domain.model import TodoM, UserM


class TodoRepository(Protocol):
    """Contract for todo persistence."""

    async def insert(self, todo: TodoM) -> TodoM: ...
    async def find_all(self) -> list[TodoM]: ...
    async def find_by_id(self, id: int) -> TodoM | None: ...
    async def update_content(self, id: int, is_done: bool) -> None: ...
    async def delete_by_id(self, id: int) -> None: ...


class UserRepository(Protocol):
    """Contract for user persistence."""

    async def get_user_by_username(self, username: str) -> UserM | None: ...
    async def update_last_login(self, username: str) -> None: ...
    async def update_refresh_token(
        self, username: str, refresh_token: str | None
    ) -> None: ...


class PasswordHasher(Protocol):
    """One-way hashing used for passwords and stored refresh tokens."""

    async def hash(self, value: str) -> str: ...
    async def compare(self, value: str, hashed: str | None) -> bool: ...


class TokenService(Protocol):
    """Signs and verifies JWTs."""

    def create_token(
        self, payload: dict[str, Any], secret: str, expires_in: int
    ) -> str: ...
    def check_token(self, token: str, secret: str) -> dict[str, Any]: ...


class JWTConfig(Protocol):
    """Secrets and lifetimes (seconds) for access and refresh tokens."""

    jwt_secret: str
    jwt_expiration_time: int
    jwt_refresh_secret: str
    jwt_refresh_expiration_time: int


class Logger(Protocol):
    """Context-first logging capability injected into use cases and handlers."""

    def debug(self, context: str, message: str) -> None: ...
    def log(self, context: str, message: str) -> None: ...
    def warn(self, context: str, message: str) -> None: ...
    def error(self, context: str, message: str, trace: str | None = None) -> None: ...
    def verbose(self, context: str, message: str) -> None: ...
