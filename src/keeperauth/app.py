from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager

import structlog
from starlette.responses import Response

from keeperauth.config import Config
from keeperauth.core.core import Core
from keeperauth.core.modules.session.models import SessionPayload, SessionToken
from keeperauth.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for session operations used by the routing layer."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def sign_in(self, user_id: str, response: Response) -> SessionToken:
        """Issue a session for a user the caller has already authenticated and set its cookie."""
        session = self._core.services.session
        token = await session.create_session(user_id)
        session.attach_session(response, token)
        logger.info("session_created", user_id=user_id)
        return token

    def sign_out(self, response: Response) -> None:
        """Drop the session cookie. Safe to call without a session."""
        self._core.services.session.clear_session(response)

    async def verify_session(self, token: str) -> SessionPayload | None:
        return await self._core.services.session.verify_session(token)

    async def get_current_session(self, cookies: Mapping[str, str]) -> SessionPayload | None:
        return await self._core.services.session.get_current_session(cookies)

    async def require_session(self, cookies: Mapping[str, str]) -> SessionPayload:
        """Get the current session, raise AuthenticationError if there is none."""
        payload = await self.get_current_session(cookies)
        if payload is None:
            raise AuthenticationError
        return payload
