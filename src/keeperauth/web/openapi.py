from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from keeperauth.core.modules.session.models import SESSION_COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Keeperauth API",
            version="0.1.0",
            summary="Stateless cookie sessions backed by signed tokens",
            routes=app.routes,
        )

        security_schemes = openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
        security_schemes["SessionCookie"] = {
            "type": "apiKey",
            "in": "cookie",
            "name": SESSION_COOKIE_NAME,
            "description": "Signed session token stored in an HttpOnly cookie",
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"SessionCookie": []}]

        public_endpoints = {
            ("GET", "/health"),
            ("GET", "/api/v1/auth/session"),
            ("POST", "/api/v1/auth/signout"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Authentication required", "type": "authentication_error"},
                {"message": "Server configuration error.", "type": "configuration_error"},
            ]
        }
    }
