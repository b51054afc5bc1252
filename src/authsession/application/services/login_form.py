"""Login form - input validation in front of SessionService.login().

Hey future me - this is the thin layer a login screen talks to. It checks the fields
locally (no network!) and only hands valid input to SessionService. Field errors are
kept per field so the UI can show them under the right input box.
"""

import logging
from collections.abc import AsyncIterator

from authsession.application.services.session_service import SessionService
from authsession.domain.dtos import SessionTokens
from authsession.domain.exceptions import ValidationError
from authsession.domain.value_objects import AsyncResult, Error

logger = logging.getLogger(__name__)

FIELD_IDENTIFIER = "identifier"
FIELD_SECRET = "secret"

MIN_IDENTIFIER_LENGTH = 8
MIN_SECRET_LENGTH = 6

FIX_ERRORS_MESSAGE = "Please fix the errors and try again"


def validate_identifier(value: str | None) -> ValidationError | None:
    """Check the phone-number field."""
    if value is None or not value.strip():
        return ValidationError("Phone number is required", field=FIELD_IDENTIFIER)
    if len(value.strip()) < MIN_IDENTIFIER_LENGTH:
        return ValidationError("Please enter a valid phone number", field=FIELD_IDENTIFIER)
    return None


def validate_secret(value: str | None) -> ValidationError | None:
    """Check the password field (length counts untrimmed characters)."""
    if value is None or not value.strip():
        return ValidationError("Password is required", field=FIELD_SECRET)
    if len(value) < MIN_SECRET_LENGTH:
        return ValidationError(
            f"Password must be at least {MIN_SECRET_LENGTH} characters", field=FIELD_SECRET
        )
    return None


def validate_credentials(identifier: str | None, secret: str | None) -> list[ValidationError]:
    """Validate both fields, returning every problem found."""
    return [
        error
        for error in (validate_identifier(identifier), validate_secret(secret))
        if error is not None
    ]


class LoginForm:
    """Per-screen form state: field errors plus the login action."""

    def __init__(self, session_service: SessionService) -> None:
        self._session_service = session_service
        self.field_errors: dict[str, str] = {}

    def validate_field(self, field: str, value: str | None) -> str | None:
        """Validate a single field as the user types; returns its error message."""
        validators = {FIELD_IDENTIFIER: validate_identifier, FIELD_SECRET: validate_secret}
        validator = validators.get(field)
        if validator is None:
            raise ValueError(f"Unknown login form field: {field}")

        error = validator(value)
        if error is None:
            self.field_errors.pop(field, None)
            return None
        self.field_errors[field] = error.message
        return error.message

    def clear_errors(self) -> None:
        self.field_errors.clear()

    async def login(
        self, identifier: str | None, secret: str | None
    ) -> AsyncIterator[AsyncResult[SessionTokens]]:
        """Validate, then delegate to SessionService.login().

        Invalid input yields a single Error without touching the network.
        """
        errors = validate_credentials(identifier, secret)
        if errors:
            self.field_errors = {error.field or "": error.message for error in errors}
            logger.debug("Login form rejected: %s", sorted(self.field_errors))
            yield Error(FIX_ERRORS_MESSAGE)
            return

        self.clear_errors()
        async for result in self._session_service.login(identifier or "", secret or ""):
            yield result
