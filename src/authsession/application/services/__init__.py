"""Application services - token persistence, session lifecycle and error mapping."""

from authsession.application.services.login_form import LoginForm, validate_credentials
from authsession.application.services.session_service import (
    SessionService,
    SessionStatus,
    collect_terminal,
)
from authsession.application.services.token_store import TokenStore, epoch_millis

__all__ = [
    "LoginForm",
    "SessionService",
    "SessionStatus",
    "TokenStore",
    "collect_terminal",
    "epoch_millis",
    "validate_credentials",
]
