"""Error classifier - turns failed logins into ONE user-facing message.

Hey future me - two kinds of failure land here:

1. The server answered, but not with a usable success (4xx, 5xx, or a 2xx with a
   garbage body). We try to parse the error body first; if it carries a non-blank
   "message", the server's wording wins. Otherwise the status-code table decides.
2. Nothing answered at all (DNS, refused connection, timeout). is_network_failure()
   guesses whether it's connectivity - it's a HEURISTIC, not an exhaustive check!

Everything here is a pure function of its input. Malformed bodies never raise.
"""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from authsession.domain.dtos import ApiErrorBody
from authsession.domain.entities import ErrorCategory, ErrorClassification

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
LOGIN_FAILED_MESSAGE = "Login failed. Please try again."
DEFAULT_STATUS_MESSAGE = "An unexpected error occurred. Please try again."

# One message per status bucket; anything not listed gets DEFAULT_STATUS_MESSAGE
STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request. Please check your input.",
    401: "Invalid credentials. Please check your phone number and password.",
    403: "Access denied. You don't have permission to perform this action.",
    404: "Service not found. Please try again later.",
    408: "Request timeout. Please check your internet connection.",
    422: "Invalid data provided. Please check your input.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "Server error. Please try again later.",
    502: "Service temporarily unavailable. Please try again later.",
    503: "Service unavailable. Please try again later.",
    504: "Request timeout. Please try again later.",
}

# Substrings that smell like connectivity trouble in exception text.
# Approximate on purpose - different stacks word these differently.
NETWORK_FAILURE_INDICATORS: tuple[str, ...] = (
    "unable to resolve host",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "timeout",
    "timed out",
    "connection refused",
)


def message_for_status(status_code: int) -> str:
    """Fixed user-facing message for an HTTP status code."""
    return STATUS_MESSAGES.get(status_code, DEFAULT_STATUS_MESSAGE)


def parse_error_body(text: str | None) -> ApiErrorBody | None:
    """Best-effort parse of an error body; None when it isn't a JSON object."""
    if not text or not text.strip():
        return None
    try:
        return ApiErrorBody.model_validate_json(text)
    except PydanticValidationError:
        logger.debug("Error body is not a structured error response")
        return None


def classify_response(status_code: int, error_body: str | None) -> ErrorClassification:
    """Classify an HTTP response that didn't produce a usable success."""
    parsed = parse_error_body(error_body)
    code = str(parsed.code) if parsed and parsed.code is not None else None

    if parsed and parsed.message and parsed.message.strip():
        message = parsed.message
    else:
        message = message_for_status(status_code)

    return ErrorClassification(
        message=message,
        is_network_issue=False,
        category=ErrorCategory.from_status(status_code),
        status_code=status_code,
        code=code,
    )


# Yo - I/O-category first (socket errors, httpx network/timeout errors), then a text sniff
# for wrappers that hide the real type. Walks __cause__ too, since callers often re-raise.
def is_network_failure(cause: BaseException) -> bool:
    """Guess whether a transport failure is a connectivity problem."""
    current: BaseException | None = cause
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError | httpx.NetworkError | httpx.TimeoutException):
            return True
        text = str(current).lower()
        if any(indicator in text for indicator in NETWORK_FAILURE_INDICATORS):
            return True
        current = current.__cause__
    return False


def classify_failure(cause: BaseException) -> ErrorClassification:
    """Classify a failure where no HTTP response was received."""
    network = is_network_failure(cause)
    return ErrorClassification(
        message=NETWORK_ERROR_MESSAGE if network else LOGIN_FAILED_MESSAGE,
        is_network_issue=network,
        category=ErrorCategory.TRANSPORT,
    )
