"""JWT signing and verification using python-jose."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt


class JwtTokenService:
    """Create and verify signed JWTs.

    Args:
        algorithm: JWS algorithm used for both signing and verification.
    """

    def __init__(self, algorithm: str = "HS256") -> None:
        self.algorithm = algorithm

    def create_token(self, payload: dict[str, Any], secret: str, expires_in: int) -> str:
        """Sign ``payload`` with an ``exp`` claim ``expires_in`` seconds from now."""
        claims = dict(payload)
        claims["exp"] = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def check_token(self, token: str, secret: str) -> dict[str, Any]:
        """Return the token's claims.

        Raises:
            jose.JWTError: If the signature is invalid or the token has expired.
        """
        return jwt.decode(token, secret, algorithms=[self.algorithm])
