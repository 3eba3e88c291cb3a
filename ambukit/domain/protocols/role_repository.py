"""RoleRepository protocol (port) for the role registry.

Repositories raise on transport failure. Degrading a failure to an empty
result is the service layer's job (PolicyService), not the adapter's.
"""

from typing import Protocol

from ambukit.domain.entities import Role
from ambukit.domain.enums import RoleKind


class RoleRepository(Protocol):
    """Port for role records in the backing store."""

    async def find_all(self) -> list[Role]:
        """Return every role in store order (oldest first)."""
        ...

    async def find_by_id(self, role_id: str) -> Role | None:
        """Return the role with that ID, or None."""
        ...

    async def find_by_kind(self, kind: RoleKind) -> list[Role]:
        """Return all roles of a kind in store order (oldest first)."""
        ...

    async def save(self, role: Role) -> Role:
        """Persist a new role and return it with its store-assigned ID."""
        ...
