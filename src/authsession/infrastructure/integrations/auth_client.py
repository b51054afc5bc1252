"""HTTP client for the remote credential endpoint."""

import logging

import httpx

from authsession.config import AuthApiSettings
from authsession.domain.entities import Credentials
from authsession.domain.ports import IAuthTransport, TransportResponse
from authsession.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)


class AuthApiClient(IAuthTransport):
    """Posts credentials to the login endpoint over httpx."""

    def __init__(
        self,
        settings: AuthApiSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize auth API client.

        Args:
            settings: Endpoint configuration (base URL, path, timeout, field names)
            client: Explicit httpx client; the shared HttpClientPool client if None
        """
        self.settings = settings
        self._client = client

    @property
    def login_url(self) -> str:
        return f"{self.settings.base_url}{self.settings.login_path}"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await HttpClientPool.get_client(timeout=self.settings.timeout)

    def build_payload(self, credentials: Credentials) -> dict[str, str]:
        """Map credentials onto the endpoint's field names."""
        return {
            self.settings.identifier_field: credentials.identifier,
            self.settings.secret_field: credentials.secret,
        }

    # Hey future me - ANY status code comes back as a TransportResponse, 4xx and 5xx
    # included (no raise_for_status here!). Only "no response at all" raises, and that's
    # httpx.TransportError (ConnectError, TimeoutException, ...) bubbling straight up.
    async def submit_credentials(self, credentials: Credentials) -> TransportResponse:
        """
        POST credentials to the login endpoint.

        Args:
            credentials: Identifier and secret to submit

        Returns:
            Raw status code and body text of whatever the server answered

        Raises:
            httpx.TransportError: If no HTTP response was received
        """
        client = await self._get_client()
        response = await client.post(
            self.login_url,
            json=self.build_payload(credentials),
            timeout=self.settings.timeout,
        )
        logger.debug("POST %s -> %d", self.settings.login_path, response.status_code)
        return TransportResponse(status_code=response.status_code, text=response.text)
