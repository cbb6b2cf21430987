"""Set-Cookie header values carrying the access and refresh tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from todoapi.usecases.auth import TokenResult

ACCESS_COOKIE = "Authentication"
REFRESH_COOKIE = "Refresh"


class CookieService:
    def format_access_token_cookie(self, token_result: TokenResult) -> str:
        return self._cookie(ACCESS_COOKIE, token_result.token, token_result.expires_in)

    def format_refresh_token_cookie(self, token_result: TokenResult) -> str:
        return self._cookie(REFRESH_COOKIE, token_result.token, token_result.expires_in)

    def get_clear_cookies(self) -> list[str]:
        return [self._cookie(ACCESS_COOKIE, "", 0), self._cookie(REFRESH_COOKIE, "", 0)]

    @staticmethod
    def _cookie(name: str, value: str, max_age: int) -> str:
        return f"{name}={value}; HttpOnly; Path=/; Max-Age={max_age}"
