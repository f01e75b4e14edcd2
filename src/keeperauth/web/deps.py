from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from keeperauth.app import App
from keeperauth.core.modules.session.models import SESSION_COOKIE_NAME, SessionPayload

# Security scheme (documents the cookie in OpenAPI)
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, scheme_name="SessionCookie", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_optional_session(
    app: Annotated[App, Depends(get_app)],
    request: Request,
    _session_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionPayload | None:
    """Current session from the request cookies, or None."""
    return await app.get_current_session(request.cookies)


async def get_session(
    app: Annotated[App, Depends(get_app)],
    request: Request,
    _session_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionPayload:
    """Current session from the request cookies; raises AuthenticationError without one."""
    return await app.require_session(request.cookies)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
OptionalSessionDep = Annotated[SessionPayload | None, Depends(get_optional_session)]
SessionDep = Annotated[SessionPayload, Depends(get_session)]
