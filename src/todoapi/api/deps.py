"""Shared FastAPI dependencies: sessions, app-wide services, use cases and auth guards.

App-wide collaborators (settings, logger, hashing and token services) are
created by the application factory and stored on ``app.state``; use cases
and repositories are built per request around the request's session.
"""

from collections.abc import AsyncGenerator

from fastapi import Cookie, Depends, Request
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.config import Settings
from todoapi.domain.model import UserM, UserWithoutPassword
from todoapi.exceptions import UnauthorizedError
from todoapi.logger import LoggerService
from todoapi.repositories.todo_repository import DatabaseTodoRepository
from todoapi.repositories.user_repository import DatabaseUserRepository
from todoapi.schemas.auth import AuthLoginRequest
from todoapi.services.bcrypt_service import BcryptService
from todoapi.services.cookie_service import ACCESS_COOKIE, REFRESH_COOKIE, CookieService
from todoapi.services.jwt_service import JwtTokenService
from todoapi.usecases.auth import IsAuthenticatedUseCases, LoginUseCases, LogoutUseCases
from todoapi.usecases.todo import (
    AddTodoUseCases,
    DeleteTodoUseCases,
    GetTodoUseCases,
    GetTodosUseCases,
    UpdateTodoUseCases,
)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session from the app-level session factory.

    The session factory is stored on ``request.app.state.session_factory``
    by the application lifespan. The session auto-closes when the request ends.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_logger(request: Request) -> LoggerService:
    return request.app.state.logger


def get_bcrypt_service(request: Request) -> BcryptService:
    return request.app.state.bcrypt_service


def get_jwt_service(request: Request) -> JwtTokenService:
    return request.app.state.jwt_service


def get_cookie_service() -> CookieService:
    return CookieService()


# ---------------------------------------------------------------------------
# Repositories & use cases
# ---------------------------------------------------------------------------


def get_todo_repository(db: AsyncSession = Depends(get_db)) -> DatabaseTodoRepository:
    return DatabaseTodoRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> DatabaseUserRepository:
    return DatabaseUserRepository(db)


def get_todos_usecases(
    repository: DatabaseTodoRepository = Depends(get_todo_repository),
) -> GetTodosUseCases:
    return GetTodosUseCases(repository)


def get_todo_usecases(
    repository: DatabaseTodoRepository = Depends(get_todo_repository),
) -> GetTodoUseCases:
    return GetTodoUseCases(repository)


def get_add_todo_usecases(
    logger: LoggerService = Depends(get_logger),
    repository: DatabaseTodoRepository = Depends(get_todo_repository),
) -> AddTodoUseCases:
    return AddTodoUseCases(logger, repository)


def get_update_todo_usecases(
    logger: LoggerService = Depends(get_logger),
    repository: DatabaseTodoRepository = Depends(get_todo_repository),
) -> UpdateTodoUseCases:
    return UpdateTodoUseCases(logger, repository)


def get_delete_todo_usecases(
    logger: LoggerService = Depends(get_logger),
    repository: DatabaseTodoRepository = Depends(get_todo_repository),
) -> DeleteTodoUseCases:
    return DeleteTodoUseCases(logger, repository)


def get_login_usecases(
    logger: LoggerService = Depends(get_logger),
    jwt_service: JwtTokenService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
    repository: DatabaseUserRepository = Depends(get_user_repository),
    bcrypt_service: BcryptService = Depends(get_bcrypt_service),
) -> LoginUseCases:
    """Provide a LoginUseCases wired to the app's JWT settings and services."""
    return LoginUseCases(logger, jwt_service, settings, repository, bcrypt_service)


def get_logout_usecases(
    repository: DatabaseUserRepository = Depends(get_user_repository),
) -> LogoutUseCases:
    return LogoutUseCases(repository)


def get_is_authenticated_usecases(
    repository: DatabaseUserRepository = Depends(get_user_repository),
) -> IsAuthenticatedUseCases:
    return IsAuthenticatedUseCases(repository)


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def _token_username(jwt_service: JwtTokenService, token: str, secret: str) -> str:
    try:
        claims = jwt_service.check_token(token, secret)
    except JWTError as exc:
        raise UnauthorizedError("Invalid or expired token") from exc
    username = claims.get("username")
    if not username:
        raise UnauthorizedError("Invalid or expired token")
    return username


async def login_guard(
    credentials: AuthLoginRequest | None = None,
    login_usecases: LoginUseCases = Depends(get_login_usecases),
    logger: LoggerService = Depends(get_logger),
) -> UserWithoutPassword:
    """Validate the body credentials and return the authenticated user.

    Raises:
        UnauthorizedError: If either credential is missing or they do not match.
    """
    if credentials is None or not credentials.username or not credentials.password:
        logger.warn("LoginGuard", "Username or password is missing")
        raise UnauthorizedError("Username or password is missing")
    user = await login_usecases.validate_user_for_local_strategy(
        credentials.username, credentials.password
    )
    if user is None:
        logger.warn("LocalStrategy", "Invalid username or password")
        raise UnauthorizedError("Invalid username or password")
    return user


async def access_guard(
    authentication: str | None = Cookie(default=None, alias=ACCESS_COOKIE),
    login_usecases: LoginUseCases = Depends(get_login_usecases),
    jwt_service: JwtTokenService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
    logger: LoggerService = Depends(get_logger),
) -> UserM:
    """Authenticate the request from its ``Authentication`` cookie."""
    if not authentication:
        raise UnauthorizedError("No authorization token was found")
    username = _token_username(jwt_service, authentication, settings.jwt_secret)
    user = await login_usecases.validate_user_for_jwt_strategy(username)
    if user is None:
        logger.warn("JwtStrategy", "User not found")
        raise UnauthorizedError("User not found")
    return user


async def refresh_guard(
    refresh: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
    login_usecases: LoginUseCases = Depends(get_login_usecases),
    jwt_service: JwtTokenService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
    logger: LoggerService = Depends(get_logger),
) -> UserM:
    """Authenticate the request from its ``Refresh`` cookie and the stored token hash."""
    if not refresh:
        raise UnauthorizedError("No refresh token was found")
    username = _token_username(jwt_service, refresh, settings.jwt_refresh_secret)
    user = await login_usecases.get_user_if_refresh_token_matches(refresh, username)
    if user is None:
        logger.warn("JwtRefreshStrategy", "User not found or hash not correct")
        raise UnauthorizedError("User not found or hash not correct")
    return user
