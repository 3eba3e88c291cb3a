"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from ambukit.infrastructure.persistence.models.audit_log import AuditLogModel
from ambukit.infrastructure.persistence.models.policy import PolicyModel
from ambukit.infrastructure.persistence.models.role import RoleModel

__all__ = ["AuditLogModel", "PolicyModel", "RoleModel"]
