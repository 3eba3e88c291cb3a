"""SQL implementation of AuditProtocol.

Append-only audit logging in the audit_logs table:
- Async SQLAlchemy for database operations
- Result types for error handling (no exceptions)
- Only INSERT and SELECT are issued; entries are never updated

Usage:
    from ambukit.infrastructure.audit import SqlAuditAdapter

    adapter = SqlAuditAdapter(database)
    result = await adapter.record(
        action=ActionKind.UPDATE,
        entity=EntityKind.KIT_ITEM,
        entity_id=item_id,
        actor_username="maria",
        actor_role=role_id,
        details="Stock 5 → 3",
    )
"""

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ambukit.core.enums import ErrorCode
from ambukit.core.result import Failure, Result, Success
from ambukit.domain.entities import AuditLogEntry
from ambukit.domain.enums import ActionKind, EntityKind
from ambukit.domain.errors import AuditError
from ambukit.infrastructure.persistence.database import Database
from ambukit.infrastructure.persistence.models import AuditLogModel

MAX_QUERY_LIMIT = 1000


def _query_error_details(
    exc: Exception,
    action: ActionKind | None,
    entity: EntityKind | None,
    actor_username: str | None,
) -> dict[str, Any]:
    details: dict[str, Any] = {"error_type": type(exc).__name__}
    if action is not None:
        details["action"] = action.value
    if entity is not None:
        details["entity"] = entity.value
    if actor_username is not None:
        details["actor_username"] = actor_username
    return details


class SqlAuditAdapter:
    """SQL implementation of AuditProtocol.

    Stateless: all state lives in the database. Each call opens its own
    session, so the adapter can be shared application-wide.

    Attributes:
        database: Database providing sessions.
    """

    def __init__(self, database: Database) -> None:
        """Initialize adapter with the database handle.

        Args:
            database: Database providing sessions (injected by container).
        """
        self.database = database

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

        Returns:
            Result[None, AuditError]:
                - Success(None) if audit entry recorded
                - Failure(AuditError) if database operation failed

        Note:
            Timestamp is set by the database (created_at).
        """
        try:
            audit_log = AuditLogModel(
                action=action.value,
                entity=entity.value,
                entity_id=entity_id,
                actor_username=actor_username,
                actor_role=actor_role,
                details=details,
            )
            async with self.database.get_session() as session:
                session.add(audit_log)

            return Success(value=None)

        except SQLAlchemyError as e:
            return Failure(
                error=AuditError(
                    message=f"Failed to record audit log: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details={
                        "action": action.value,
                        "entity": entity.value,
                        "entity_id": entity_id,
                        "error_type": type(e).__name__,
                    },
                )
            )
        except Exception as e:
            return Failure(
                error=AuditError(
                    message=f"Unexpected error recording audit log: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details={
                        "action": action.value,
                        "entity": entity.value,
                        "entity_id": entity_id,
                        "error_type": type(e).__name__,
                    },
                )
            )

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
        """Query the audit trail (read-only).

        Args:
            action: Filter by action (None = all).
            entity: Filter by entity type (None = all).
            entity_id: Filter by entity identifier (None = all).
            actor_username: Filter by actor (None = all).
            start_date: From date inclusive (None = no lower bound).
            end_date: To date inclusive (None = no upper bound).
            limit: Maximum results (default 100, capped at 1000).

        Returns:
            Result[list[AuditLogEntry], AuditError]:
                - Success(entries), newest first (list may be empty)
                - Failure(AuditError) if database operation failed
        """
        try:
            limit = min(limit, MAX_QUERY_LIMIT)

            query = select(AuditLogModel)

            if action is not None:
                query = query.where(AuditLogModel.action == action.value)
            if entity is not None:
                query = query.where(AuditLogModel.entity == entity.value)
            if entity_id is not None:
                query = query.where(AuditLogModel.entity_id == entity_id)
            if actor_username is not None:
                query = query.where(AuditLogModel.actor_username == actor_username)
            if start_date is not None:
                query = query.where(AuditLogModel.created_at >= start_date)
            if end_date is not None:
                query = query.where(AuditLogModel.created_at <= end_date)

            # Newest first; UUIDv7 ids break same-second ties
            query = query.order_by(
                AuditLogModel.created_at.desc(), AuditLogModel.id.desc()
            ).limit(limit)

            async with self.database.get_session() as session:
                result = await session.execute(query)
                entries = [self._to_domain(log) for log in result.scalars().all()]

            return Success(value=entries)

        except SQLAlchemyError as e:
            return Failure(
                error=AuditError(
                    message=f"Failed to query audit logs: {str(e)}",
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    details=_query_error_details(e, action, entity, actor_username),
                )
            )
        except Exception as e:
            # Unreadable rows (action or entity outside the enums)
            return Failure(
                error=AuditError(
                    message=f"Unexpected error querying audit logs: {str(e)}",
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    details=_query_error_details(e, action, entity, actor_username),
                )
            )

    def _to_domain(self, model: AuditLogModel) -> AuditLogEntry:
        """Convert database model to domain entry."""
        return AuditLogEntry(
            id=model.id,
            timestamp=model.created_at,
            action=ActionKind(model.action),
            entity=EntityKind(model.entity),
            entity_id=model.entity_id,
            actor_username=model.actor_username,
            actor_role=model.actor_role,
            details=model.details,
        )
