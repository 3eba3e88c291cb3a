"""Audit log entry entity.

Append-only record of an action an actor performed on an entity. Written
by callers after an authorized operation, never by the engine.
"""

from dataclasses import dataclass
from datetime import datetime

from ambukit.domain.enums import ActionKind, EntityKind


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditLogEntry:
    """Immutable audit record.

    Attributes:
        id: Record identifier.
        timestamp: When the action happened.
        action: What was done.
        entity: Entity type affected.
        entity_id: Identifier of the affected entity.
        actor_username: Who did it (None for system actions).
        actor_role: Role ID of the actor at the time.
        details: Free-form detail ("Stock 5 → 3").
    """

    id: str
    timestamp: datetime
    action: ActionKind
    entity: EntityKind
    entity_id: str
    actor_username: str | None = None
    actor_role: str | None = None
    details: str | None = None

    @property
    def summary(self) -> str:
        """One-line description for logs and admin screens."""
        who = self.actor_username or "system"
        return f"{who} {self.action.value} {self.entity.value} [{self.entity_id}]"
