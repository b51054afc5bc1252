"""Application settings loaded from environment variables.

Hey future me - every knob lives here, grouped into sections. Env vars use the
AUTHSESSION_ prefix and "__" for nesting:

    AUTHSESSION_LOG_LEVEL=DEBUG
    AUTHSESSION_API__BASE_URL=https://auth.example.com
    AUTHSESSION_STORAGE__BACKEND=database
    AUTHSESSION_STORAGE__DATABASE_URL=sqlite:///./data/session.db

get_settings() is cached - call get_settings.cache_clear() in tests after
changing the environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthApiSettings(BaseModel):
    """Remote credential endpoint configuration."""

    base_url: str = Field(
        default="https://learn-api.cambofreelance.com",
        description="Base URL of the authentication API",
    )
    login_path: str = Field(default="/api/oauth/token", description="Login endpoint path")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    # Wire names of the two credential fields in the request body
    identifier_field: str = "phoneNumber"
    secret_field: str = "password"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class StorageSettings(BaseModel):
    """Token persistence configuration."""

    backend: Literal["memory", "database"] = "database"
    database_url: str = "sqlite:///./data/authsession.db"

    def sqlite_db_path(self) -> Path | None:
        """Filesystem path of the SQLite database, None for other engines."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        path = self.database_url[len(prefix) :]
        if not path or path == ":memory:":
            return None
        return Path(path)


class ObservabilitySettings(BaseModel):
    """Logging configuration."""

    log_json_format: bool = False


class Settings(BaseSettings):
    """Top-level application settings."""

    model_config = SettingsConfigDict(
        env_prefix="AUTHSESSION_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "authsession"
    log_level: str = "INFO"

    api: AuthApiSettings = Field(default_factory=AuthApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
