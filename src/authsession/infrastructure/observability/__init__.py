"""Observability infrastructure for structured logging."""

from authsession.infrastructure.observability.logging import (
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
