from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from keeperauth.app import App
from keeperauth.config import Config
from keeperauth.errors import ConfigurationError, UserError
from keeperauth.web.error_handlers import (
    configuration_error_handler,
    general_exception_handler,
    user_error_handler,
)
from keeperauth.web.openapi import set_custom_openapi
from keeperauth.web.routers import auth_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Keeperauth API",
        lifespan=lifespan,
        openapi_tags=[],
    )

    # Set before startup so requests work even when lifespan is not run
    app.state.app = app_instance

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
