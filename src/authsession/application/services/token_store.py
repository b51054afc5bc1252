"""Token store - durable token material and expiry computation.

Hey future me - this is the single owner of the six persisted session keys:

    access_token, refresh_token, token_type, expires_in, login_time, is_logged_in

Only three methods WRITE: save(), update_partial(), clear(). Everything else is a
read plus some arithmetic on login_time + expires_in. All times are epoch MILLIS
(login_time) while expires_in is SECONDS - don't mix them up!

The clock is injectable so tests can pin "now" to the exact expiry millisecond.
"""

import logging
import time
from collections.abc import Callable

from authsession.domain.entities import TokenRecord
from authsession.domain.exceptions import InitializationError
from authsession.domain.ports import IKeyValueStorage

logger = logging.getLogger(__name__)

KEY_ACCESS_TOKEN = "access_token"
KEY_REFRESH_TOKEN = "refresh_token"
KEY_TOKEN_TYPE = "token_type"
KEY_EXPIRES_IN = "expires_in"
KEY_LOGIN_TIME = "login_time"
KEY_IS_LOGGED_IN = "is_logged_in"

DEFAULT_TOKEN_TYPE = "Bearer"
MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * 1000


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class TokenStore:
    """Persists session tokens and answers logged-in / expired questions."""

    def __init__(
        self,
        storage: IKeyValueStorage | None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        """Initialize token store.

        Args:
            storage: Durable key-value backend
            clock: Returns current time in epoch millis

        Raises:
            InitializationError: If no storage backend is given
        """
        if storage is None:
            raise InitializationError("Token storage backend is not available")
        self._storage = storage
        self._clock = clock

    # =========================================================================
    # WRITES
    # =========================================================================

    def save(
        self,
        access_token: str,
        refresh_token: str | None,
        token_type: str | None,
        expires_in_seconds: int,
    ) -> None:
        """Store a fresh token set after a successful login.

        Stamps login_time with the current clock and flips is_logged_in on.
        A None refresh token or token type is stored as absent, so the getters
        fall back to None and "Bearer".
        All six keys go out in ONE storage commit.
        """
        self._storage.set_many(
            {
                KEY_ACCESS_TOKEN: access_token,
                KEY_REFRESH_TOKEN: refresh_token,
                KEY_TOKEN_TYPE: token_type,
                KEY_EXPIRES_IN: int(expires_in_seconds),
                KEY_LOGIN_TIME: self._clock(),
                KEY_IS_LOGGED_IN: True,
            }
        )
        logger.info("Session tokens saved (expires_in=%ss)", expires_in_seconds)

    # Hey future me - this is for the refresh path (not implemented yet, see
    # SessionService.refresh_token). Refresh token and is_logged_in stay as they are!
    def update_partial(self, new_access_token: str, new_expires_in_seconds: int) -> None:
        """Swap the access token and restart the expiry clock."""
        self._storage.set_many(
            {
                KEY_ACCESS_TOKEN: new_access_token,
                KEY_EXPIRES_IN: int(new_expires_in_seconds),
                KEY_LOGIN_TIME: self._clock(),
            }
        )
        logger.debug("Access token updated (expires_in=%ss)", new_expires_in_seconds)

    def clear(self) -> None:
        """Erase all token material."""
        self._storage.clear()
        logger.info("Session tokens cleared")

    # =========================================================================
    # READS
    # =========================================================================

    def get_access_token(self) -> str | None:
        return self._storage.get(KEY_ACCESS_TOKEN)

    def get_refresh_token(self) -> str | None:
        return self._storage.get(KEY_REFRESH_TOKEN)

    def get_token_type(self) -> str:
        token_type = self._storage.get(KEY_TOKEN_TYPE)
        return token_type if token_type is not None else DEFAULT_TOKEN_TYPE

    def get_authorization_header_value(self) -> str | None:
        """Return "<type> <token>", or None when there is no access token.

        Never builds a header around a missing token.
        """
        access_token = self.get_access_token()
        if access_token is None:
            return None
        return f"{self.get_token_type()} {access_token}"

    # Listen up - the flag ALONE is not enough! A half-cleared store (flag left behind,
    # token gone) must read as logged out.
    def is_logged_in(self) -> bool:
        """True iff the logged-in flag is set AND an access token is present."""
        return bool(self._storage.get(KEY_IS_LOGGED_IN, False)) and bool(
            self.get_access_token()
        )

    def _elapsed_and_lifetime_millis(self) -> tuple[int, int]:
        login_time = int(self._storage.get(KEY_LOGIN_TIME, 0))
        expires_in = int(self._storage.get(KEY_EXPIRES_IN, 0))
        return self._clock() - login_time, expires_in * MILLIS_PER_SECOND

    # Hey future me - STRICT greater-than here! At elapsed == lifetime the token is still
    # valid; it expires one millisecond later. Don't "fix" this to >= without a reason.
    def is_expired(self) -> bool:
        """True when not logged in, or the token lifetime has been exceeded."""
        if not self.is_logged_in():
            return True
        elapsed, lifetime = self._elapsed_and_lifetime_millis()
        return elapsed > lifetime

    def remaining_minutes(self) -> int:
        """Whole minutes until expiry, 0 if logged out or already at/after expiry."""
        if not self.is_logged_in():
            return 0
        elapsed, lifetime = self._elapsed_and_lifetime_millis()
        if elapsed >= lifetime:
            return 0
        return (lifetime - elapsed) // MILLIS_PER_MINUTE

    def snapshot(self) -> TokenRecord | None:
        """Return the stored record, or None if nothing was ever saved."""
        if self._storage.get(KEY_LOGIN_TIME) is None and self.get_access_token() is None:
            return None
        return TokenRecord(
            access_token=self.get_access_token(),
            refresh_token=self.get_refresh_token(),
            token_type=self.get_token_type(),
            expires_in_seconds=int(self._storage.get(KEY_EXPIRES_IN, 0)),
            issued_at_epoch_millis=int(self._storage.get(KEY_LOGIN_TIME, 0)),
            logged_in=self.is_logged_in(),
        )
