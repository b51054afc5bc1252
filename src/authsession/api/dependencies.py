"""Dependency injection for API endpoints."""

from typing import cast

from fastapi import Depends, HTTPException, Request

from authsession.application.services import LoginForm, SessionService


# Hey future me, the SessionService is built ONCE in lifecycle.lifespan() and parked on
# app.state. Missing means startup didn't finish - 503, not 500.
def get_session_service(request: Request) -> SessionService:
    """Get the session service from app state.

    Raises:
        HTTPException: 503 if the session service is not initialized
    """
    if not hasattr(request.app.state, "session_service"):
        raise HTTPException(
            status_code=503,
            detail="Session service not initialized",
        )
    return cast(SessionService, request.app.state.session_service)


def get_login_form(
    session_service: SessionService = Depends(get_session_service),
) -> LoginForm:
    """Fresh login form per request (field errors are per-submission state)."""
    return LoginForm(session_service)
