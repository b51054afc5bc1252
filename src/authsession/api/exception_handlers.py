"""Custom exception handlers for the FastAPI application.

Domain exceptions become JSON responses with a proper status code instead of
leaking out as 500s with stack traces.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from authsession.domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DomainException,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain exceptions.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle input validation errors with 422 Unprocessable Entity."""
        logger.info("Validation error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle missing/expired sessions with 401 Unauthorized."""
        logger.info("Authentication required at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": exc.message},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Handle misconfiguration / unavailable storage with 503."""
        logger.error("Configuration error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": exc.message},
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request, exc: DomainException
    ) -> JSONResponse:
        """Catch-all for domain exceptions without a dedicated handler."""
        logger.error("Unhandled domain error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )
