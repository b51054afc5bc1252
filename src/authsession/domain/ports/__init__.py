"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from authsession.domain.entities import Credentials


# Hey future me, IKeyValueStorage is the ONLY thing TokenStore knows about persistence!
# Think "durable dict": get a key, write a batch of keys in one commit, wipe everything.
# Values are JSON-compatible scalars (str, int, bool). set_many MUST be all-or-nothing
# from the caller's perspective - TokenStore relies on that to never expose half a save.
class IKeyValueStorage(ABC):
    """Durable key-value map used for session token material."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default if absent."""
        pass

    @abstractmethod
    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write all values in a single commit."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass


@dataclass(frozen=True)
class TransportResponse:
    """An HTTP response that actually reached the client.

    Raw on purpose - SessionService decides what a well-formed body is, and
    ErrorClassifier parses error bodies itself.
    """

    status_code: int
    text: str = ""

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300


# Yo, the transport contract is tiny but strict: return a TransportResponse whenever the
# server answered (ANY status code, 2xx or not), and RAISE when no response came back at
# all (DNS failure, refused connection, timeout). SessionService uses exactly that split
# to tell "server said no" apart from "couldn't reach the server".
class IAuthTransport(ABC):
    """Submits credentials to the remote authentication endpoint."""

    @abstractmethod
    async def submit_credentials(self, credentials: Credentials) -> TransportResponse:
        """POST credentials and return the raw response.

        Raises:
            Exception: Any failure where no HTTP response was received
        """
        pass


__all__ = ["IAuthTransport", "IKeyValueStorage", "TransportResponse"]
