"""Configuration module for authsession."""

from .settings import (
    AuthApiSettings,
    ObservabilitySettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "AuthApiSettings",
    "ObservabilitySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
