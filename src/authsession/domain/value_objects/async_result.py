"""Three-state result of an asynchronous operation.

Hey future me - this is the ONLY shape async session operations hand back to callers!
An operation's result is exactly one of:

    Loading          -> remote call in flight, no payload
    Success(value)   -> operation finished, payload attached
    Error(message)   -> operation failed, one human-readable message

It's a tagged union (plain frozen dataclasses joined with Union), NOT a class with
status flags. Consumers should `match` on it:

    match result:
        case Loading():
            show_spinner()
        case Success(value=tokens):
            go_to_dashboard(tokens)
        case Error(message=message):
            show_error(message)
        case _:
            assert_never(result)

Success and Error are TERMINAL - once a caller sees one, that invocation is done.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ResultStatus(str, Enum):
    """Tag of an AsyncResult (handy for logs and wire formats)."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Loading:
    """Operation is in flight."""

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.LOADING

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Operation finished successfully with a value."""

    value: T

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.SUCCESS

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Error:
    """Operation failed; message is safe to show to the user."""

    message: str

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.ERROR

    @property
    def is_terminal(self) -> bool:
        return True


AsyncResult = Union[Loading, Success[T], Error]

# Loading carries no payload, one shared instance is enough
LOADING = Loading()
