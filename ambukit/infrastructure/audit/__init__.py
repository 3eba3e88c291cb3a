"""Audit trail adapters."""

from ambukit.infrastructure.audit.sql_adapter import SqlAuditAdapter

__all__ = ["SqlAuditAdapter"]
