"""Infrastructure persistence layer."""

from .database import Database
from .key_value_storage import DatabaseKeyValueStorage, InMemoryKeyValueStorage
from .models import Base, SessionValueModel

__all__ = [
    "Base",
    "Database",
    "DatabaseKeyValueStorage",
    "InMemoryKeyValueStorage",
    "SessionValueModel",
]
