"""Shared fixtures for authsession tests."""

from unittest.mock import AsyncMock

import pytest

from authsession.application.services import SessionService, TokenStore
from authsession.domain.ports import IAuthTransport, TransportResponse
from authsession.infrastructure.persistence import InMemoryKeyValueStorage

# 2024-01-01T00:00:00Z in epoch millis
START_MILLIS = 1_704_067_200_000


class FakeClock:
    """Manually advanced epoch-millis clock."""

    def __init__(self, now: int = START_MILLIS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


def token_body(
    access_token: str = "access-abc",
    refresh_token: str = "refresh-xyz",
    token_type: str = "Bearer",
    expires_in: int = 3600,
) -> str:
    """JSON body of a successful login response."""
    return (
        f'{{"accessToken": "{access_token}", "refreshToken": "{refresh_token}", '
        f'"tokenType": "{token_type}", "expiresIn": {expires_in}}}'
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def token_store(storage: InMemoryKeyValueStorage, clock: FakeClock) -> TokenStore:
    return TokenStore(storage, clock=clock)


@pytest.fixture
def transport() -> AsyncMock:
    """Transport mock answering 200 with a valid token body."""
    mock = AsyncMock(spec=IAuthTransport)
    mock.submit_credentials.return_value = TransportResponse(
        status_code=200, text=token_body()
    )
    return mock


@pytest.fixture
def session_service(transport: AsyncMock, token_store: TokenStore) -> SessionService:
    return SessionService(transport=transport, token_store=token_store)
