from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from keeperauth.config import Config
from keeperauth.core.modules.session.service import SessionService

logger = structlog.get_logger(__name__)


class Services:
    """Service instances built from the application config."""

    session: SessionService

    def __init__(self, config: Config) -> None:
        self.session = SessionService(config)


class Core:
    """Container providing config and all service instances."""

    config: Config
    services: Services

    def __init__(self, config: Config) -> None:
        self.config = config
        self.services = Services(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifecycle; services hold no resources, so only logs."""
        logger.info("core_started")
        try:
            yield
        finally:
            logger.info("core_stopped")
