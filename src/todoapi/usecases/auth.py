"""Authentication use cases: login, token issuance, logout and session checks."""

from __future__ import annotations

from dataclasses import dataclass

from todoapi.domain.model import UserM, UserWithoutPassword
from todoapi.domain.ports import JWTConfig, Logger, PasswordHasher, TokenService, UserRepository
from todoapi.exceptions import UnauthorizedError


@dataclass(frozen=True)
class TokenResult:
    """A signed token and its lifetime in seconds."""

    token: str
    expires_in: int


class LoginUseCases:
    """Issues tokens and validates users for the login, access and refresh guards.

    Args:
        logger: Context-first logger.
        jwt_service: Signs the access and refresh tokens.
        jwt_config: Secrets and lifetimes for both token kinds.
        user_repository: User lookup and login bookkeeping.
        bcrypt_service: Hashes and compares passwords and refresh tokens.
    """

    context = "LoginUseCases execute"

    def __init__(
        self,
        logger: Logger,
        jwt_service: TokenService,
        jwt_config: JWTConfig,
        user_repository: UserRepository,
        bcrypt_service: PasswordHasher,
    ) -> None:
        self.logger = logger
        self.jwt_service = jwt_service
        self.jwt_config = jwt_config
        self.user_repository = user_repository
        self.bcrypt_service = bcrypt_service

    async def get_jwt_token(self, username: str) -> TokenResult:
        self.logger.log(self.context, f"The user {username} have been logged.")
        expires_in = self.jwt_config.jwt_expiration_time
        token = self.jwt_service.create_token(
            {"username": username}, self.jwt_config.jwt_secret, expires_in
        )
        return TokenResult(token=token, expires_in=expires_in)

    async def get_jwt_refresh_token(self, username: str) -> TokenResult:
        """Issue a refresh token and store its hash so it can be checked and revoked later."""
        self.logger.log(self.context, f"The user {username} have been logged.")
        expires_in = self.jwt_config.jwt_refresh_expiration_time
        token = self.jwt_service.create_token(
            {"username": username}, self.jwt_config.jwt_refresh_secret, expires_in
        )
        await self.set_current_refresh_token(token, username)
        return TokenResult(token=token, expires_in=expires_in)

    async def validate_user_for_local_strategy(
        self, username: str, password: str
    ) -> UserWithoutPassword | None:
        """Check credentials; on success record the login and return the user without password."""
        user = await self.user_repository.get_user_by_username(username)
        if user is None:
            return None
        if not await self.bcrypt_service.compare(password, user.password):
            return None
        await self.update_login_time(user.username)
        return user.without_password()

    async def validate_user_for_jwt_strategy(self, username: str) -> UserM | None:
        return await self.user_repository.get_user_by_username(username)

    async def update_login_time(self, username: str) -> None:
        await self.user_repository.update_last_login(username)

    async def set_current_refresh_token(self, refresh_token: str, username: str) -> None:
        hashed = await self.bcrypt_service.hash(refresh_token)
        await self.user_repository.update_refresh_token(username, hashed)

    async def get_user_if_refresh_token_matches(
        self, refresh_token: str, username: str
    ) -> UserM | None:
        user = await self.user_repository.get_user_by_username(username)
        if user is None:
            return None
        if await self.bcrypt_service.compare(refresh_token, user.hash_refresh_token):
            return user
        return None


class LogoutUseCases:
    """Revokes the stored refresh token; clearing cookies is left to the router."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, username: str) -> None:
        await self.user_repository.update_refresh_token(username, None)


class IsAuthenticatedUseCases:
    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, username: str) -> UserWithoutPassword:
        user = await self.user_repository.get_user_by_username(username)
        if user is None:
            raise UnauthorizedError("User not found")
        return user.without_password()
