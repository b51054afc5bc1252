"""Session endpoints: login (SSE), logout, session status, authorization, refresh."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, SecretStr
from sse_starlette.sse import EventSourceResponse

from authsession.api.dependencies import get_login_form, get_session_service
from authsession.application.services import LoginForm, SessionService
from authsession.application.services.token_store import DEFAULT_TOKEN_TYPE
from authsession.domain.dtos import SessionTokens
from authsession.domain.exceptions import AuthenticationError
from authsession.domain.value_objects import AsyncResult, Error, Loading, Success

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


# Hey future me - no length rules on these models! LoginForm owns validation so a
# short password comes back as an `error` event with field errors, same as the UI flow.
class LoginRequest(BaseModel):
    """Login form submission."""

    identifier: str = ""
    secret: SecretStr = Field(default=SecretStr(""))


class SessionStatusResponse(BaseModel):
    logged_in: bool
    expired: bool
    remaining_minutes: int
    token_type: str | None


class AuthorizationResponse(BaseModel):
    authorization: str


class ResultResponse(BaseModel):
    """Terminal state of a non-streaming operation."""

    status: str
    message: str | None = None


def result_payload(
    result: AsyncResult[Any], field_errors: dict[str, str] | None = None
) -> dict[str, Any]:
    """Turn a result state into a JSON-able dict.

    Tokens never leave the server - a Success only reports type and lifetime.
    """
    payload: dict[str, Any] = {"status": result.status.value}
    match result:
        case Loading():
            pass
        case Success(value=SessionTokens() as tokens):
            payload["token_type"] = tokens.token_type or DEFAULT_TOKEN_TYPE
            payload["expires_in"] = tokens.expires_in
        case Success():
            pass
        case Error(message=message):
            payload["message"] = message
            if field_errors:
                payload["field_errors"] = field_errors
    return payload


@router.post("/login")
async def login(
    body: LoginRequest,
    form: LoginForm = Depends(get_login_form),
) -> EventSourceResponse:
    """Log in and stream the result states as Server-Sent Events.

    Emits `loading` first, then exactly one `success` or `error` event. Invalid
    input emits a single `error` event carrying `field_errors`.

    Example JS client:
    ```javascript
    const res = await fetch('/api/auth/login', {method: 'POST', body: ...});
    // parse `event: loading|success|error` frames from res.body
    ```
    """

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        async for result in form.login(body.identifier, body.secret.get_secret_value()):
            yield {
                "event": result.status.value,
                "data": json.dumps(result_payload(result, form.field_errors)),
            }

    return EventSourceResponse(event_generator())


@router.post("/logout", response_model=ResultResponse)
async def logout(
    session_service: SessionService = Depends(get_session_service),
) -> ResultResponse:
    result = session_service.logout()
    return ResultResponse(**result_payload(result))


@router.get("/session", response_model=SessionStatusResponse)
async def get_session(
    session_service: SessionService = Depends(get_session_service),
) -> SessionStatusResponse:
    """Current session state (never exposes the tokens)."""
    status = session_service.status()
    return SessionStatusResponse(
        logged_in=status.logged_in,
        expired=status.expired,
        remaining_minutes=status.remaining_minutes,
        token_type=status.token_type,
    )


@router.get("/authorization", response_model=AuthorizationResponse)
async def get_authorization(
    session_service: SessionService = Depends(get_session_service),
) -> AuthorizationResponse:
    """Authorization header value for downstream calls.

    Raises:
        AuthenticationError: 401 when there's no valid session
    """
    header = session_service.get_authorization_header()
    if header is None:
        raise AuthenticationError("Not logged in or session expired")
    return AuthorizationResponse(authorization=header)


@router.post("/refresh", response_model=ResultResponse)
async def refresh(
    session_service: SessionService = Depends(get_session_service),
) -> ResultResponse:
    result = session_service.refresh_token()
    if isinstance(result, Error):
        logger.info("Token refresh unavailable: %s", result.message)
    return ResultResponse(**result_payload(result))
