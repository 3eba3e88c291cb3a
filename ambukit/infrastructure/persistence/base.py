"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Base for mutable models (combines above)

Domain entities do NOT inherit from these; repositories map between them.

Identifiers:
    IDs are UUIDv7 rendered as 36-character strings. Role and policy IDs
    are opaque strings in the domain, and UUIDv7 text sorts by creation
    time, so "store order" is simply ORDER BY created_at, id.

Architecture:
    BaseModel (id, created_at)
        ↑
        ├── BaseMutableModel (+ updated_at via TimestampMixin)
        │   ├── RoleModel
        │   └── PolicyModel
        │
        └── AuditLogModel (immutable, no updated_at)
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


def new_id() -> str:
    """Generate a time-ordered string identifier."""
    return str(uuid7())


class BaseModel(DeclarativeBase):
    """Base class for all database models (mutable and immutable).

    Provides:
    - id: UUIDv7 string primary key (auto-generated)
    - created_at: Timestamp when record was created (UTC)
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class TimestampMixin:
    """Mixin for mutable models that track updates.

    Note:
        Use BaseMutableModel instead of mixing TimestampMixin + BaseModel
        manually.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models.

    Provides:
        - id: UUIDv7 string primary key (from BaseModel)
        - created_at: Timestamp when created (from BaseModel)
        - updated_at: Timestamp when last updated (from TimestampMixin)

    When NOT to use:
        For append-only models (audit logs), use BaseModel directly.
    """

    __abstract__ = True
