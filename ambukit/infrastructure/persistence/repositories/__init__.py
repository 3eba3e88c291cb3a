"""SQLAlchemy repository adapters."""

from ambukit.infrastructure.persistence.repositories.policy_repository import (
    PolicyRepository,
)
from ambukit.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)

__all__ = ["PolicyRepository", "RoleRepository"]
