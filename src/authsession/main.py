"""FastAPI application factory.

Run with (needs the `server` extra, `pip install authsession[server]`):
    uvicorn authsession.main:create_app --factory
"""

from fastapi import FastAPI

from authsession import __version__
from authsession.api.exception_handlers import register_exception_handlers
from authsession.api.routers import api_router
from authsession.config import Settings, get_settings
from authsession.infrastructure.lifecycle import lifespan
from authsession.infrastructure.observability.middleware import (
    RequestLoggingMiddleware,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment (tests pass their own)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    # lifespan() reads these instead of calling get_settings() again
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app
