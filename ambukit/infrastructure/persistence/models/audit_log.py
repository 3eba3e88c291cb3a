"""Audit log database model (append-only).

Inherits BaseModel (no updated_at): entries are never modified.
created_at is the entry timestamp.
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ambukit.infrastructure.persistence.base import BaseModel


class AuditLogModel(BaseModel):
    """Audit log table (audit_logs).

    Fields:
        action: create, read, update, delete
        entity: Entity kind value (kit, kitItem, ...)
        entity_id: Identifier of the affected entity
        actor_username: Who did it (NULL for system actions)
        actor_role: Actor's role ID at the time
        details: Free-form detail text
    """

    __tablename__ = "audit_logs"

    action: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    entity: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(255), nullable=False)
    actor_username: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True
    )
    actor_role: Mapped[str | None] = mapped_column(String(36), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_audit_logs_entity_entity_id", "entity", "entity_id"),
        Index("ix_audit_logs_created_at", "created_at"),
    )
