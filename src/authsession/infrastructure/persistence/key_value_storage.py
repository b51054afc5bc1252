"""Key-value storage backends for the token store.

Two implementations of IKeyValueStorage:

- InMemoryKeyValueStorage: a dict, gone when the process exits. Tests and
  throwaway sessions.
- DatabaseKeyValueStorage: one SQLAlchemy row per key, survives restarts.

Both honor the set_many() contract: the whole batch lands or none of it does.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select

from authsession.domain.ports import IKeyValueStorage
from authsession.infrastructure.persistence.database import Database
from authsession.infrastructure.persistence.models import SessionValueModel

logger = logging.getLogger(__name__)


class InMemoryKeyValueStorage(IKeyValueStorage):
    """Process-local key-value storage."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set_many(self, values: Mapping[str, Any]) -> None:
        # Build the new state first, then swap - readers never see half a batch
        updated = dict(self._values)
        updated.update(values)
        self._values = updated

    def clear(self) -> None:
        self._values = {}


# Hey future me - every call opens its own short transaction via session_scope().
# A handful of rows, a handful of reads per request: no caching needed. If a write
# fails mid-batch, session_scope() rolls back, so set_many() stays all-or-nothing.
class DatabaseKeyValueStorage(IKeyValueStorage):
    """SQLAlchemy-backed durable key-value storage."""

    def __init__(self, database: Database) -> None:
        """Initialize storage and make sure its table exists.

        Raises:
            InitializationError: If the database is unreachable
        """
        self._database = database
        self._database.create_tables()

    def get(self, key: str, default: Any = None) -> Any:
        with self._database.session_scope() as session:
            raw = session.execute(
                select(SessionValueModel.value).where(SessionValueModel.key == key)
            ).scalar_one_or_none()
        if raw is None:
            return default
        return json.loads(raw)

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._database.session_scope() as session:
            for key, value in values.items():
                session.merge(SessionValueModel(key=key, value=json.dumps(value)))
        logger.debug("Persisted %d session keys", len(values))

    def clear(self) -> None:
        with self._database.session_scope() as session:
            session.execute(delete(SessionValueModel))
