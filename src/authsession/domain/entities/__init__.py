"""Session domain entities.

Hey future me - these are the plain data holders of the session subsystem.
Credentials live only for one login attempt. TokenRecord is what TokenStore
persists. ErrorClassification is what ErrorClassifier hands back.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Credentials:
    """What the user typed into the login form.

    Never persisted, never logged - secret is hidden from repr on purpose so a
    stray `logger.debug(credentials)` can't leak it.
    """

    identifier: str
    secret: str = field(repr=False)


# Hey future me - TokenRecord mirrors the six persisted keys one-to-one. The store
# builds it on read; nothing outside TokenStore should construct one for writing.
@dataclass(frozen=True)
class TokenRecord:
    """Persisted token material plus computed-expiry inputs."""

    access_token: str | None = field(repr=False)
    refresh_token: str | None = field(repr=False)
    token_type: str
    expires_in_seconds: int
    issued_at_epoch_millis: int
    logged_in: bool

    @property
    def expires_at_epoch_millis(self) -> int:
        """Epoch millis of the last valid instant."""
        return self.issued_at_epoch_millis + self.expires_in_seconds * 1000


class ErrorCategory(str, Enum):
    """Where a failure came from.

    - AUTHENTICATION: server answered 4xx (credentials or request rejected)
    - SERVER: server answered 5xx
    - TRANSPORT: no response reached the client
    - UNEXPECTED: anything else (odd status codes, malformed success bodies)
    """

    AUTHENTICATION = "authentication"
    SERVER = "server"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorCategory":
        if 400 <= status_code < 500:
            return cls.AUTHENTICATION
        if 500 <= status_code < 600:
            return cls.SERVER
        return cls.UNEXPECTED


@dataclass(frozen=True)
class ErrorClassification:
    """User-facing outcome of classifying a failure."""

    message: str
    is_network_issue: bool
    category: ErrorCategory
    status_code: int | None = None
    code: str | None = None  # server-supplied error code, if the body had one


__all__ = [
    "Credentials",
    "ErrorCategory",
    "ErrorClassification",
    "TokenRecord",
]
