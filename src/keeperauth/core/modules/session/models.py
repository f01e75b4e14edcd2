"""Session token models and the session cookie contract."""

from datetime import timedelta
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "session"
SESSION_ALGORITHM = "HS256"
SESSION_TTL = timedelta(days=7)
SESSION_MAX_AGE_SECONDS = int(SESSION_TTL.total_seconds())


class SessionPayload(BaseModel):
    """Identity carried by a session token.

    The only claim the rest of the system trusts. Strict so that a token
    whose `userId` is a number or a list does not get coerced into a string.
    """

    user_id: str = Field(..., alias="userId", min_length=1, description="ID of the authenticated user")

    model_config = ConfigDict(populate_by_name=True, strict=True, frozen=True)


def session_cookie_kwargs(token: SessionToken) -> dict[str, Any]:
    return {
        "key": SESSION_COOKIE_NAME,
        "value": token,
        "max_age": SESSION_MAX_AGE_SECONDS,
        "httponly": True,
        "secure": True,
        "samesite": "lax",
        "path": "/",
    }


def clear_session_cookie_kwargs() -> dict[str, Any]:
    # delete_cookie must match the path and flags the cookie was set with
    return {
        "key": SESSION_COOKIE_NAME,
        "httponly": True,
        "secure": True,
        "samesite": "lax",
        "path": "/",
    }
