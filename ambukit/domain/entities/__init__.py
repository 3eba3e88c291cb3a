"""Domain entities for authorization."""

from ambukit.domain.entities.actor import Actor
from ambukit.domain.entities.audit_log_entry import AuditLogEntry
from ambukit.domain.entities.policy import Policy
from ambukit.domain.entities.role import Role

__all__ = ["Actor", "AuditLogEntry", "Policy", "Role"]
