"""Database session management."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from authsession.config import StorageSettings
from authsession.domain.exceptions import InitializationError

logger = logging.getLogger(__name__)


# Hey future me - this is a SYNC engine on purpose! Token reads (is_logged_in, is_expired)
# are plain synchronous calls, and a few local SQLite rows don't justify async plumbing.
class Database:
    """Database connection and session manager."""

    def __init__(self, settings: StorageSettings) -> None:
        """Initialize database with storage settings.

        Raises:
            InitializationError: If the database directory or engine can't be set up
        """
        self.settings = settings

        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if "sqlite" in settings.database_url:
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": 30,  # Wait up to 30s for lock
            }
            # In-memory SQLite lives inside ONE connection - share it
            if ":memory:" in settings.database_url:
                engine_kwargs["poolclass"] = StaticPool

        db_path = settings.sqlite_db_path()
        if db_path is not None:
            try:
                db_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise InitializationError(
                    f"Unable to create SQLite database directory '{db_path.parent}': {exc}"
                ) from exc

        try:
            self._engine = create_engine(settings.database_url, **engine_kwargs)
        except (SQLAlchemyError, ValueError) as exc:
            raise InitializationError(
                f"Unable to initialize token database '{settings.database_url}': {exc}"
            ) from exc

        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional scope for database operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            # Rollback on any exception, then re-raise for the caller
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create all tables.

        Raises:
            InitializationError: If the database is unreachable
        """
        from authsession.infrastructure.persistence.models import Base

        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise InitializationError(f"Token database is not available: {exc}") from exc
        logger.debug("Token tables ensured")

    def close(self) -> None:
        """Close database connection."""
        self._engine.dispose()
