"""Value objects for the session domain."""

from authsession.domain.value_objects.async_result import (
    LOADING,
    AsyncResult,
    Error,
    Loading,
    ResultStatus,
    Success,
)

__all__ = [
    "LOADING",
    "AsyncResult",
    "Error",
    "Loading",
    "ResultStatus",
    "Success",
]
