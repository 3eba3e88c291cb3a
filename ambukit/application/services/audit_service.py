"""Audit service: fire-and-forget recording over AuditProtocol.

Callers log AFTER an authorized operation succeeded. Audit failures never
break the caller: log() swallows and logs them, get_logs() degrades to [].

Usage:
    audit_service = get_audit_service()

    # Awaited (still never raises)
    await audit_service.log(ActionKind.UPDATE, EntityKind.KIT_ITEM, item_id, actor,
                            details="Stock 5 → 3")

    # Background: returns immediately, the task is held until it completes
    audit_service.log_async(ActionKind.CREATE, EntityKind.BASE, base_id, actor)
"""

import asyncio
from datetime import UTC, datetime, timedelta

from ambukit.core.result import Failure, Success
from ambukit.domain.entities import Actor, AuditLogEntry
from ambukit.domain.enums import ActionKind, EntityKind
from ambukit.domain.protocols import AuditProtocol, LoggerProtocol


class AuditService:
    """Application-facing audit trail.

    Attributes:
        _audit: Audit sink (SqlAuditAdapter in production).
        _logger: Structured logger.
        _pending: Strong references to in-flight log_async tasks.
    """

    def __init__(self, audit: AuditProtocol, logger: LoggerProtocol) -> None:
        self._audit = audit
        self._logger = logger
        self._pending: set[asyncio.Task[None]] = set()

    async def log(
        self,
        action: ActionKind,
        entity: EntityKind,
        entity_id: str,
        actor: Actor | None,
        details: str | None = None,
    ) -> None:
        """Record an entry; failures are logged, never raised.

        Args:
            action: What was done.
            entity: Entity type affected.
            entity_id: Identifier of the affected entity.
            actor: Who did it (None for system actions).
            details: Optional free-form detail.
        """
        try:
            result = await self._audit.record(
                action=action,
                entity=entity,
                entity_id=entity_id,
                actor_username=actor.username if actor else None,
                actor_role=actor.role_id if actor else None,
                details=details,
            )
        except Exception as e:
            self._logger.error(
                "audit_log_error",
                error=e,
                action=action.value,
                entity=entity.value,
                entity_id=entity_id,
            )
            return

        match result:
            case Success():
                self._logger.debug(
                    "audit_logged",
                    action=action.value,
                    entity=entity.value,
                    entity_id=entity_id,
                )
            case Failure(error=error):
                self._logger.error(
                    "audit_log_failed",
                    action=action.value,
                    entity=entity.value,
                    entity_id=entity_id,
                    error_code=error.code.value,
                    error_message=error.message,
                )

    def log_async(
        self,
        action: ActionKind,
        entity: EntityKind,
        entity_id: str,
        actor: Actor | None,
        details: str | None = None,
    ) -> asyncio.Task[None]:
        """Schedule log() in the background and return the task.

        Must be called from a running event loop.
        """
        task = asyncio.create_task(self.log(action, entity, entity_id, actor, details))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every pending log_async task (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def get_logs(
        self,
        *,
        action: ActionKind | None = None,
        entity: EntityKind | None = None,
        entity_id: str | None = None,
        actor_username: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        """Query entries newest first; [] if the sink failed."""
        result = await self._audit.query(
            action=action,
            entity=entity,
            entity_id=entity_id,
            actor_username=actor_username,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
        )
        match result:
            case Success(value=entries):
                return entries
            case Failure(error=error):
                self._logger.error(
                    "audit_query_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return []
        return []

    async def get_logs_for_entity(
        self, entity: EntityKind, entity_id: str, limit: int = 50
    ) -> list[AuditLogEntry]:
        """History of one entity."""
        return await self.get_logs(entity=entity, entity_id=entity_id, limit=limit)

    async def get_logs_for_user(
        self, username: str, limit: int = 50
    ) -> list[AuditLogEntry]:
        """Activity of one actor."""
        return await self.get_logs(actor_username=username, limit=limit)

    async def get_recent_logs(self, limit: int = 100) -> list[AuditLogEntry]:
        """Entries from the last 24 hours."""
        since = datetime.now(UTC) - timedelta(days=1)
        return await self.get_logs(start_date=since, limit=limit)

    async def get_logs_by_action(
        self, action: ActionKind, limit: int = 100
    ) -> list[AuditLogEntry]:
        return await self.get_logs(action=action, limit=limit)

    async def get_logs_by_entity(
        self, entity: EntityKind, limit: int = 100
    ) -> list[AuditLogEntry]:
        return await self.get_logs(entity=entity, limit=limit)
