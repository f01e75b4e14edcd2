from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import jwt
import structlog
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import Response

from keeperauth.config import Config
from keeperauth.core.modules.session.models import (
    SESSION_ALGORITHM,
    SESSION_COOKIE_NAME,
    SESSION_MAX_AGE_SECONDS,
    SessionPayload,
    SessionToken,
    clear_session_cookie_kwargs,
    session_cookie_kwargs,
)
from keeperauth.errors import ConfigurationError, ValidationError
from keeperauth.utils import now

logger = structlog.get_logger(__name__)


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class SessionService:
    """Issues and verifies stateless, signed session tokens.

    Nothing is stored server-side: a token is valid when its HS256 signature
    checks out under the configured secret and its `exp` claim lies in the
    future. Every verification failure yields None so callers cannot tell a
    forged token from an expired or malformed one.
    """

    def __init__(self, config: Config, clock: Callable[[], datetime] = now) -> None:
        secret = config.auth_secret.get_secret_value() if config.auth_secret is not None else ""
        self._key: bytes | None = secret.encode("utf-8") if secret else None
        self._clock = clock

    def _signing_key(self) -> bytes:
        if self._key is None:
            raise ConfigurationError("KEEPER_AUTH_SECRET is not set")
        return self._key

    async def create_session(self, user_id: str) -> SessionToken:
        """Sign a token for an already-authenticated user, valid for seven days."""
        key = self._signing_key()
        if not isinstance(user_id, str) or not user_id:
            raise ValidationError("User ID must be a non-empty string")

        issued_at = int(self._clock().timestamp())
        claims = {
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + SESSION_MAX_AGE_SECONDS,
        }
        return SessionToken(jwt.encode(claims, key, algorithm=SESSION_ALGORITHM))

    async def verify_session(self, token: object) -> SessionPayload | None:
        """Decode a token, or return None if it is malformed, forged, expired or malshaped."""
        key = self._signing_key()
        if not isinstance(token, str) or not token:
            return None

        try:
            # Time claims are checked below against the injected clock
            claims = jwt.decode(
                token,
                key,
                algorithms=[SESSION_ALGORITHM],
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except (jwt.InvalidTokenError, ValueError) as e:
            logger.debug("session_rejected", reason=type(e).__name__)
            return None

        expires_at = claims.get("exp")
        if not _is_timestamp(expires_at) or not _is_timestamp(claims.get("iat")):
            logger.debug("session_rejected", reason="bad_time_claims")
            return None
        not_before = claims.get("nbf")
        if not_before is not None and not _is_timestamp(not_before):
            logger.debug("session_rejected", reason="bad_time_claims")
            return None

        current = self._clock().timestamp()
        if current >= expires_at:
            logger.debug("session_rejected", reason="expired")
            return None
        if not_before is not None and current < not_before:
            logger.debug("session_rejected", reason="not_yet_valid")
            return None

        try:
            return SessionPayload.model_validate({"userId": claims.get("userId")})
        except PydanticValidationError:
            logger.debug("session_rejected", reason="bad_payload")
            return None

    async def get_current_session(self, cookies: Mapping[str, str]) -> SessionPayload | None:
        """Verify the session cookie from the given request cookies, if any."""
        token = cookies.get(SESSION_COOKIE_NAME)
        if not token:
            return None
        return await self.verify_session(token)

    def attach_session(self, response: Response, token: SessionToken) -> None:
        """Set the session cookie on the response, replacing any previous one."""
        response.set_cookie(**session_cookie_kwargs(token))

    def clear_session(self, response: Response) -> None:
        """Expire the session cookie on the client."""
        response.delete_cookie(**clear_session_cookie_kwargs())
