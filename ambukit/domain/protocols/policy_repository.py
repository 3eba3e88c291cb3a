"""PolicyRepository protocol (port) for the policy store.

Repositories raise on transport failure. PolicyService catches and degrades.
"""

from typing import Protocol

from ambukit.domain.entities import Policy
from ambukit.domain.enums import EntityKind


class PolicyRepository(Protocol):
    """Port for policy records in the backing store."""

    async def find_by_role(self, role_id: str) -> list[Policy]:
        """Return every policy of a role in store order (oldest first)."""
        ...

    async def find_by_id(self, policy_id: str) -> Policy | None:
        """Return the policy with that ID, or None."""
        ...

    async def find_by_role_and_entity(
        self, role_id: str, entity: EntityKind
    ) -> list[Policy]:
        """Return the policies matching both keys (normally zero or one)."""
        ...

    async def save(self, policy: Policy) -> Policy:
        """Persist a new policy and return it with its store-assigned ID."""
        ...

    async def update(self, policy: Policy) -> Policy:
        """Overwrite the four flags of an existing policy.

        Raises:
            LookupError: If no policy with policy.id exists.
        """
        ...
