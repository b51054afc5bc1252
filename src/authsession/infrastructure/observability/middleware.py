"""Middleware for observability: correlation IDs and request logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from authsession.infrastructure.observability.logging import set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


# Hey future me - request BODIES are never logged here. Login bodies carry the secret!
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation ID and log method, path, status, duration."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        method = request.method
        path = request.url.path
        start = time.perf_counter()

        logger.info(f"→ {method} {path}", extra={"method": method, "path": path})
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"✗ {method} {path} failed")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"← {method} {path} {response.status_code} ({duration_ms:.1f}ms)",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 1),
            },
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
