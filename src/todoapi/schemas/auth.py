from pydantic import BaseModel


class AuthLoginRequest(BaseModel):
    """Login credentials.

    Both fields are optional at the schema level so that the login guard can
    answer a missing credential with 401 instead of a validation error.
    """

    username: str | None = None
    password: str | None = None
