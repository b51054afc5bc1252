"""Session service - login/logout orchestration and session-validity checks.

Hey future me - this is THE entry point UI code talks to. The login protocol per call:

    login() ──► Loading ──► Success(tokens)   (tokens committed to TokenStore first)
                       └──► Error(message)    (TokenStore untouched)

Loading is yielded BEFORE anything touches the network, and exactly ONE terminal state
follows. No retries in here - if the caller wants retry, the caller retries.

Every remote failure is caught at this boundary and turned into Error(message). Raw
exception text never reaches the user; it goes to the log instead.

Concurrent logins are independent and race last-write-wins on the TokenStore. That's
fine for a single-session client - don't add locking unless multi-session shows up.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from authsession.application.services import error_classifier
from authsession.application.services.token_store import TokenStore
from authsession.domain.dtos import SessionTokens
from authsession.domain.entities import Credentials
from authsession.domain.ports import IAuthTransport, TransportResponse
from authsession.domain.value_objects import (
    LOADING,
    AsyncResult,
    Error,
    Success,
)

logger = logging.getLogger(__name__)

NO_REFRESH_TOKEN_MESSAGE = "No refresh token available"
REFRESH_NOT_IMPLEMENTED_MESSAGE = "Token refresh not implemented"


@dataclass(frozen=True)
class SessionStatus:
    """Snapshot of the session for status displays."""

    logged_in: bool
    expired: bool
    remaining_minutes: int
    token_type: str | None


class SessionService:
    """Owns the TokenStore and runs the login/logout lifecycle."""

    def __init__(self, transport: IAuthTransport, token_store: TokenStore) -> None:
        """Initialize session service.

        Args:
            transport: Submits credentials to the remote endpoint
            token_store: Exclusively owned token persistence
        """
        self._transport = transport
        self._token_store = token_store
        # Strong refs so abandoned logins still run to completion
        self._in_flight: set[asyncio.Task[AsyncResult[SessionTokens]]] = set()

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    # =========================================================================
    # LOGIN / LOGOUT
    # =========================================================================

    async def login(
        self, identifier: str, secret: str
    ) -> AsyncIterator[AsyncResult[SessionTokens]]:
        """Authenticate and stream the result states.

        The request is dispatched as a task when the stream starts. It runs to completion
        even if the caller stops iterating after LOADING (tokens still get stored).

        Yields:
            LOADING first, then exactly one Success(SessionTokens) or Error(message)
        """
        task = asyncio.ensure_future(
            self._dispatch(Credentials(identifier=identifier, secret=secret))
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

        yield LOADING
        yield await asyncio.shield(task)

    # Hey future me - eager task factories (3.12+) run a new task synchronously up to its
    # first suspension, i.e. inside ensure_future() above. The sleep(0) is that first
    # suspension, so nothing reaches the transport until LOADING has been handed out.
    async def _dispatch(self, credentials: Credentials) -> AsyncResult[SessionTokens]:
        await asyncio.sleep(0)
        return await self._authenticate(credentials)

    async def _authenticate(
        self, credentials: Credentials
    ) -> AsyncResult[SessionTokens]:
        try:
            response = await self._transport.submit_credentials(credentials)
        except Exception as e:
            classification = error_classifier.classify_failure(e)
            # Exception text goes to the log, the user only sees the classified message
            logger.warning(
                "Login request failed without a response (network=%s): %s",
                classification.is_network_issue,
                e,
            )
            return Error(classification.message)

        tokens = self._parse_tokens(response)
        if tokens is None:
            classification = error_classifier.classify_response(
                response.status_code, response.text
            )
            logger.info(
                "Login rejected (status=%d, category=%s)",
                response.status_code,
                classification.category.value,
            )
            return Error(classification.message)

        self._token_store.save(
            tokens.access_token,
            tokens.refresh_token,
            tokens.token_type,
            tokens.expires_in,
        )
        logger.info("Login succeeded")
        return Success(tokens)

    # Hey future me - "successful" means 2xx AND a body we can actually use. A 200 with
    # junk (or without an access token) goes down the error path like any other failure.
    @staticmethod
    def _parse_tokens(response: TransportResponse) -> SessionTokens | None:
        if not response.is_successful:
            return None
        try:
            tokens = SessionTokens.model_validate_json(response.text)
        except PydanticValidationError:
            logger.warning("Login response body is not a valid token response")
            return None
        return tokens if tokens.is_valid else None

    # No server-side invalidation exists, so logout can't fail
    def logout(self) -> AsyncResult[None]:
        """Clear the session. Always succeeds, safe to call repeatedly."""
        self._token_store.clear()
        logger.info("User logged out")
        return Success(None)

    # Listen up - this is a STUB and stays one until the refresh endpoint is wired up.
    # When implementing: stream LOADING + one terminal state exactly like login(), and
    # call token_store.update_partial() on success.
    def refresh_token(self) -> AsyncResult[SessionTokens]:
        """Refresh the access token (not implemented, never hits the network)."""
        if not self._token_store.get_refresh_token():
            return Error(NO_REFRESH_TOKEN_MESSAGE)
        return Error(REFRESH_NOT_IMPLEMENTED_MESSAGE)

    # =========================================================================
    # SESSION QUERIES
    # =========================================================================

    def is_logged_in(self) -> bool:
        """THE session-validity check: logged in and not expired."""
        return self._token_store.is_logged_in() and not self._token_store.is_expired()

    def get_access_token(self) -> str | None:
        """Access token, but only while the session is valid."""
        if not self.is_logged_in():
            return None
        return self._token_store.get_access_token()

    def get_authorization_header(self) -> str | None:
        """Authorization header value, but only while the session is valid."""
        if not self.is_logged_in():
            return None
        return self._token_store.get_authorization_header_value()

    def remaining_minutes(self) -> int:
        return self._token_store.remaining_minutes()

    def status(self) -> SessionStatus:
        """Summarize the session for UI/status endpoints."""
        logged_in = self.is_logged_in()
        return SessionStatus(
            logged_in=logged_in,
            expired=self._token_store.is_expired(),
            remaining_minutes=self._token_store.remaining_minutes(),
            token_type=self._token_store.get_token_type() if logged_in else None,
        )


async def collect_terminal(
    results: AsyncIterator[AsyncResult[SessionTokens]],
) -> AsyncResult[SessionTokens]:
    """Drain a result stream and return its terminal state.

    For callers that don't care about Loading (scripts, tests, background jobs).
    """
    last: AsyncResult[SessionTokens] = LOADING
    async for result in results:
        last = result
    return last
