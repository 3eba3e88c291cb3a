"""Repository factories.

Repositories hold the Database (not a session) and are app-scoped.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from ambukit.core.container.infrastructure import get_database

if TYPE_CHECKING:
    from ambukit.domain.protocols import PolicyRepository, RoleRepository


@lru_cache()
def get_role_repository() -> "RoleRepository":
    """Get SQL role repository singleton."""
    from ambukit.infrastructure.persistence.repositories import RoleRepository

    return RoleRepository(database=get_database())


@lru_cache()
def get_policy_repository() -> "PolicyRepository":
    """Get SQL policy repository singleton."""
    from ambukit.infrastructure.persistence.repositories import PolicyRepository

    return PolicyRepository(database=get_database())
