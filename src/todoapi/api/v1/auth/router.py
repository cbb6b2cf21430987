"""Cookie-based authentication endpoints.

Login issues an access token (``Authentication`` cookie) and a refresh
token (``Refresh`` cookie); the refresh token's hash is stored so that
logout can revoke it.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from todoapi.api.deps import (
    access_guard,
    get_cookie_service,
    get_is_authenticated_usecases,
    get_login_usecases,
    get_logout_usecases,
    login_guard,
    refresh_guard,
)
from todoapi.api.v1.auth.presenter import IsAuthPresenter
from todoapi.domain.model import UserM, UserWithoutPassword
from todoapi.jsonapi.interceptor import jsonapi_route
from todoapi.services.cookie_service import CookieService
from todoapi.usecases.auth import IsAuthenticatedUseCases, LoginUseCases, LogoutUseCases

router = APIRouter(route_class=jsonapi_route("auth"))


def _set_cookies(response: Response, *cookies: str) -> None:
    for cookie in cookies:
        response.headers.append("set-cookie", cookie)


@router.post("/login", status_code=201)
async def login(
    response: Response,
    user: UserWithoutPassword = Depends(login_guard),
    usecases: LoginUseCases = Depends(get_login_usecases),
    cookie_service: CookieService = Depends(get_cookie_service),
) -> str:
    access_token = await usecases.get_jwt_token(user.username)
    refresh_token = await usecases.get_jwt_refresh_token(user.username)
    _set_cookies(
        response,
        cookie_service.format_access_token_cookie(access_token),
        cookie_service.format_refresh_token_cookie(refresh_token),
    )
    return "Login successful"


@router.post("/logout", status_code=201)
async def logout(
    response: Response,
    user: UserM = Depends(access_guard),
    usecases: LogoutUseCases = Depends(get_logout_usecases),
    cookie_service: CookieService = Depends(get_cookie_service),
) -> str:
    await usecases.execute(user.username)
    _set_cookies(response, *cookie_service.get_clear_cookies())
    return "Logout successful"


@router.get("/is_authenticated")
async def is_authenticated(
    user: UserM = Depends(access_guard),
    usecases: IsAuthenticatedUseCases = Depends(get_is_authenticated_usecases),
) -> IsAuthPresenter:
    current = await usecases.execute(user.username)
    return IsAuthPresenter(username=current.username)


@router.get("/refresh")
async def refresh(
    response: Response,
    user: UserM = Depends(refresh_guard),
    usecases: LoginUseCases = Depends(get_login_usecases),
    cookie_service: CookieService = Depends(get_cookie_service),
) -> str:
    """Issue a new access token from a valid refresh token."""
    access_token = await usecases.get_jwt_token(user.username)
    _set_cookies(response, cookie_service.format_access_token_cookie(access_token))
    return "Refresh successful"
