from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field

from keeperauth.web.deps import AppDep, OptionalSessionDep, SessionDep
from keeperauth.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class SessionStatusResponse(BaseModel):
    """Whether the request carries a valid session."""

    authenticated: bool = Field(..., description="True if the session cookie verified")
    user_id: str | None = Field(None, alias="userId", description="Authenticated user ID")

    model_config = ConfigDict(populate_by_name=True)


class SessionView(BaseModel):
    """Identity of the authenticated user."""

    user_id: str = Field(..., alias="userId", description="Authenticated user ID")

    model_config = ConfigDict(populate_by_name=True)


@router.get(
    "/auth/session",
    summary="Get session status",
    description="Report whether the session cookie is present and valid. Never fails with 401.",
    operation_id="getSessionStatus",
    responses={
        200: {"description": "Session status"},
    },
)
async def get_session_status(session: OptionalSessionDep) -> SessionStatusResponse:
    if session is None:
        return SessionStatusResponse(authenticated=False)
    return SessionStatusResponse(authenticated=True, user_id=session.user_id)


@router.get(
    "/auth/me",
    summary="Get current session",
    description="Get the identity carried by the current session.",
    operation_id="getCurrentSession",
    responses={
        200: {"description": "Current session"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_me(session: SessionDep) -> SessionView:
    return SessionView(user_id=session.user_id)


@router.post(
    "/auth/signout",
    summary="End session",
    description="Delete the session cookie. Succeeds whether or not a session exists.",
    operation_id="signout",
    status_code=204,
    responses={
        204: {"description": "Session cookie cleared"},
    },
)
async def signout(app: AppDep, response: Response) -> None:
    app.sign_out(response)
