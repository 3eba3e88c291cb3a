"""Audit trail protocol (port).

Append-only record of actions performed on entities. The authorization
engine never writes here; domain services call it after an authorized
operation (usually through AuditService.log_async).

Error Handling:
    All methods return Result types. NEVER raise; wrap failures in
    Failure(AuditError(...)).
"""

from datetime import datetime
from typing import Protocol

from ambukit.core.result import Result
from ambukit.domain.entities import AuditLogEntry
from ambukit.domain.enums import ActionKind, EntityKind
from ambukit.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Protocol for audit trail sinks."""

    async def record(
        self,
        *,
        action: ActionKind,
        entity: EntityKind,
        entity_id: str,
        actor_username: str | None = None,
        actor_role: str | None = None,
        details: str | None = None,
    ) -> Result[None, AuditError]:
        """Record an immutable audit entry.

        Args:
            action: What was done.
            entity: Entity type affected.
            entity_id: Identifier of the affected entity.
            actor_username: Who did it (None for system actions).
            actor_role: Actor's role ID at the time.
            details: Optional free-form detail.

        Returns:
            Success(None) if stored, Failure(AuditError) otherwise.
        """
        ...

    async def query(
        self,
        *,
        action: ActionKind | None = None,
        entity: EntityKind | None = None,
        entity_id: str | None = None,
        actor_username: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int = 100,
    ) -> Result[list[AuditLogEntry], AuditError]:
        """Query entries, newest first.

        Args:
            action: Filter by action.
            entity: Filter by entity type.
            entity_id: Filter by entity identifier.
            actor_username: Filter by actor.
            start_date: Inclusive lower bound on timestamp.
            end_date: Inclusive upper bound on timestamp.
            limit: Maximum results (capped at 1000).

        Returns:
            Success(entries) or Failure(AuditError).
        """
        ...
