"""Shared HTTP client pool for connection reuse.

Hey future me - don't create a new httpx.AsyncClient per login! The pool hands out ONE
shared client (keep-alive, connection limits, timeouts) and closes it at shutdown.

Usage:
    client = await HttpClientPool.get_client(timeout=settings.api.timeout)
    response = await client.post(url, json=payload)

Don't forget HttpClientPool.close() at app shutdown (see lifecycle.py)!
"""

import asyncio
import logging
from typing import ClassVar

import httpx

logger = logging.getLogger(__name__)


class HttpClientPool:
    """Singleton HTTP client pool for connection reuse.

    - Lazy initialization (created on first use)
    - Initialization guarded by asyncio.Lock
    - Proper cleanup at shutdown
    """

    _client: ClassVar[httpx.AsyncClient | None] = None
    _lock: ClassVar[asyncio.Lock | None] = None

    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_MAX_KEEPALIVE: ClassVar[int] = 10
    DEFAULT_MAX_CONNECTIONS: ClassVar[int] = 20

    @classmethod
    async def _ensure_lock(cls) -> asyncio.Lock:
        """Create the lock lazily, inside the running event loop."""
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def get_client(cls, timeout: float | None = None) -> httpx.AsyncClient:
        """Get the shared HTTP client instance.

        Args:
            timeout: Request timeout in seconds, applied on FIRST call only

        Returns:
            Shared httpx.AsyncClient instance
        """
        lock = await cls._ensure_lock()

        async with lock:
            if cls._client is None:
                effective_timeout = timeout or cls.DEFAULT_TIMEOUT
                cls._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(effective_timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=cls.DEFAULT_MAX_KEEPALIVE,
                        max_connections=cls.DEFAULT_MAX_CONNECTIONS,
                    ),
                    http2=True,
                    follow_redirects=True,
                )
                logger.info(
                    "HTTP client pool initialized (timeout=%.1fs, max_conn=%d)",
                    effective_timeout,
                    cls.DEFAULT_MAX_CONNECTIONS,
                )

            return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the shared client; the next get_client() creates a fresh one."""
        lock = await cls._ensure_lock()

        async with lock:
            if cls._client is not None:
                await cls._client.aclose()
                cls._client = None
                logger.info("HTTP client pool closed")

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._client is not None
