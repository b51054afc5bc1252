"""External integrations - the credential endpoint client and shared HTTP pool."""

from authsession.infrastructure.integrations.auth_client import AuthApiClient
from authsession.infrastructure.integrations.http_pool import HttpClientPool

__all__ = ["AuthApiClient", "HttpClientPool"]
