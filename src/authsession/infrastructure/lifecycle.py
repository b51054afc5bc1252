"""Application lifecycle management for startup and shutdown tasks.

Startup builds the whole session stack once and parks it on app.state:

    Settings ─► storage backend ─► TokenStore ─┐
             └► AuthApiClient (shared httpx) ──┴─► SessionService

Shutdown closes the database engine and the shared HTTP client pool.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from authsession.application.services import SessionService, TokenStore
from authsession.config import Settings, StorageSettings, get_settings
from authsession.domain.exceptions import ConfigurationError
from authsession.domain.ports import IAuthTransport, IKeyValueStorage
from authsession.infrastructure.integrations import AuthApiClient, HttpClientPool
from authsession.infrastructure.observability import configure_logging
from authsession.infrastructure.persistence import (
    Database,
    DatabaseKeyValueStorage,
    InMemoryKeyValueStorage,
)

logger = logging.getLogger(__name__)


def build_key_value_storage(
    settings: StorageSettings,
) -> tuple[IKeyValueStorage, Database | None]:
    """Create the configured storage backend.

    Returns:
        The storage plus its Database (None for the in-memory backend) so the
        caller can close it at shutdown

    Raises:
        InitializationError: If the database backend can't be reached
        ConfigurationError: If the backend name is unknown
    """
    if settings.backend == "memory":
        logger.warning("Using in-memory token storage - sessions won't survive restarts")
        return InMemoryKeyValueStorage(), None
    if settings.backend == "database":
        database = Database(settings)
        return DatabaseKeyValueStorage(database), database
    raise ConfigurationError(f"Unknown storage backend: {settings.backend}")


def build_session_service(
    settings: Settings,
    storage: IKeyValueStorage,
    transport: IAuthTransport | None = None,
) -> SessionService:
    """Wire a SessionService from settings and a storage backend."""
    return SessionService(
        transport=transport or AuthApiClient(settings.api),
        token_store=TokenStore(storage),
    )


# Listen future me, everything before `yield` runs at STARTUP, everything after at SHUTDOWN.
# If the token store can't be initialized the app must NOT start - InitializationError
# propagates out of here on purpose.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = getattr(app.state, "settings", None) or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s", settings.app_name)

    storage, database = build_key_value_storage(settings.storage)
    app.state.database = database
    app.state.session_service = build_session_service(settings, storage)
    logger.info(
        "Session service ready (storage=%s, endpoint=%s)",
        settings.storage.backend,
        settings.api.base_url,
    )

    try:
        yield
    finally:
        logger.info("Shutting down application")

        if database is not None:
            try:
                database.close()
                logger.info("Database connection closed")
            except Exception as e:
                logger.exception("Error closing database: %s", e)

        try:
            await HttpClientPool.close()
        except Exception as e:
            logger.exception("Error closing HTTP client pool: %s", e)
