"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so handlers can read it without
    # parsing str(exception). Don't raise this directly - use a specific subclass so
    # callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationError(DomainException):
    """Caller-supplied credentials are malformed.

    Surfaced before any network attempt is made.

    HTTP Status: 422

    Example:
        raise ValidationError("Phone number is required", field="identifier")
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AuthenticationError(DomainException):
    """Server rejected the credentials, or no valid session exists.

    HTTP Status: 401

    Example:
        raise AuthenticationError("Not logged in or session expired")
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    HTTP Status: 503 (Service Unavailable)

    Example:
        raise ConfigurationError("Unknown storage backend: redis")
    """

    pass


class InitializationError(ConfigurationError):
    """Backing durable store is unavailable at construction time.

    Fatal - this subsystem never retries it.
    """

    pass


__all__ = [
    "DomainException",
    "ValidationError",
    "AuthenticationError",
    "ConfigurationError",
    "InitializationError",
]
