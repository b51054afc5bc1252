"""Tests for login form validation."""

from unittest.mock import AsyncMock

import pytest

from authsession.application.services import (
    LoginForm,
    SessionService,
    validate_credentials,
)
from authsession.application.services.login_form import (
    FIELD_IDENTIFIER,
    FIELD_SECRET,
    FIX_ERRORS_MESSAGE,
    validate_identifier,
    validate_secret,
)
from authsession.domain.value_objects import LOADING, Error, Success


class TestFieldValidators:
    """Test per-field validation rules."""

    @pytest.mark.parametrize("value", [None, "", "    "])
    def test_identifier_required(self, value: str | None) -> None:
        error = validate_identifier(value)

        assert error is not None
        assert error.message == "Phone number is required"
        assert error.field == FIELD_IDENTIFIER

    def test_identifier_too_short_after_trim(self) -> None:
        error = validate_identifier("  1234567  ")

        assert error is not None
        assert error.message == "Please enter a valid phone number"

    def test_identifier_valid(self) -> None:
        assert validate_identifier("012345678") is None

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_secret_required(self, value: str | None) -> None:
        error = validate_secret(value)

        assert error is not None
        assert error.message == "Password is required"
        assert error.field == FIELD_SECRET

    def test_secret_too_short(self) -> None:
        error = validate_secret("12345")

        assert error is not None
        assert error.message == "Password must be at least 6 characters"

    def test_secret_valid(self) -> None:
        assert validate_secret("123456") is None

    def test_validate_credentials_reports_both_fields(self) -> None:
        errors = validate_credentials("", "")

        assert [e.field for e in errors] == [FIELD_IDENTIFIER, FIELD_SECRET]


class TestLoginForm:
    """Test the form in front of SessionService.login()."""

    async def test_invalid_input_never_reaches_transport(
        self, session_service: SessionService, transport: AsyncMock
    ) -> None:
        form = LoginForm(session_service)

        results = [r async for r in form.login("123", "12")]

        assert results == [Error(FIX_ERRORS_MESSAGE)]
        assert set(form.field_errors) == {FIELD_IDENTIFIER, FIELD_SECRET}
        transport.submit_credentials.assert_not_called()

    async def test_valid_input_delegates_to_session_service(
        self, session_service: SessionService
    ) -> None:
        form = LoginForm(session_service)

        results = [r async for r in form.login("012345678", "secret123")]

        assert results[0] is LOADING
        assert isinstance(results[1], Success)
        assert form.field_errors == {}

    async def test_successful_submit_clears_old_errors(
        self, session_service: SessionService
    ) -> None:
        form = LoginForm(session_service)
        [r async for r in form.login("", "")]
        assert form.field_errors

        [r async for r in form.login("012345678", "secret123")]

        assert form.field_errors == {}

    def test_validate_field_sets_and_clears_error(
        self, session_service: SessionService
    ) -> None:
        form = LoginForm(session_service)

        assert form.validate_field(FIELD_SECRET, "123") == (
            "Password must be at least 6 characters"
        )
        assert FIELD_SECRET in form.field_errors

        assert form.validate_field(FIELD_SECRET, "123456") is None
        assert FIELD_SECRET not in form.field_errors

    def test_validate_unknown_field_raises(self, session_service: SessionService) -> None:
        form = LoginForm(session_service)

        with pytest.raises(ValueError):
            form.validate_field("email", "x")

    def test_clear_errors(self, session_service: SessionService) -> None:
        form = LoginForm(session_service)
        form.validate_field(FIELD_IDENTIFIER, "")

        form.clear_errors()

        assert form.field_errors == {}
