"""SQLAlchemy ORM models for authsession."""

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Hey future me - one row per session key (access_token, login_time, ...). Values are
# JSON-encoded text so ints and bools come back as ints and bools, not strings.
class SessionValueModel(Base):
    """Durable key-value row backing the token store."""

    __tablename__ = "session_values"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )
