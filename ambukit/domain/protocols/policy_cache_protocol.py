"""Policy cache protocol (port).

Memoizes role registry and policy store results for the lifetime of the
process. Two facets, both keyed by role ID:

    - roles:    role_id → Role | None   (None = store said "not found")
    - policies: role_id → list[Policy]  (empty list cached like any other)

There is no TTL. Entries live until clear() or clear_role().

Stale-resurrection guard:
    A fill is a non-atomic read-miss → store fetch → write sequence. The
    caller takes a FillToken before fetching and hands it back on write.
    clear() and clear_role() bump generations, so a write carrying a token
    taken before the clear is dropped.

    token = await cache.fill_token(role_id)
    role = await repository.find_by_id(role_id)
    await cache.set_role(role_id, role, token=token)  # False if invalidated

Implementations:
    - InMemoryPolicyCache: process-local (default)
    - RedisPolicyCache: shared between worker processes
"""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from ambukit.domain.entities import Policy, Role

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheHit(Generic[T]):
    """Wrapper distinguishing a cached value (possibly None) from a miss.

    Attributes:
        value: The cached value.
    """

    value: T


@dataclass(frozen=True, slots=True)
class FillToken:
    """Generation snapshot taken before a store fetch.

    Attributes:
        epoch: Global generation (bumped by clear()).
        role_epoch: Per-role generation (bumped by clear_role()).
    """

    epoch: int
    role_epoch: int


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Entry counts per facet.

    Attributes:
        roles: Number of cached role lookups.
        policy_sets: Number of cached per-role policy lists.
    """

    roles: int
    policy_sets: int


class PolicyCacheProtocol(Protocol):
    """Protocol for the role/policy cache."""

    async def get_role(self, role_id: str) -> CacheHit[Role | None] | None:
        """Return a CacheHit for a cached role lookup, None on miss."""
        ...

    async def set_role(
        self, role_id: str, role: Role | None, *, token: FillToken | None = None
    ) -> bool:
        """Store a role lookup result.

        Args:
            role_id: Cache key.
            role: Role found, or None for a definitive "not found".
            token: Token from fill_token(); None writes unconditionally.

        Returns:
            bool: True if stored, False if the token was invalidated.
        """
        ...

    async def get_policies(self, role_id: str) -> CacheHit[list[Policy]] | None:
        """Return a CacheHit for a cached policy list, None on miss."""
        ...

    async def set_policies(
        self,
        role_id: str,
        policies: list[Policy],
        *,
        token: FillToken | None = None,
    ) -> bool:
        """Store a role's policy list (empty lists included).

        Returns:
            bool: True if stored, False if the token was invalidated.
        """
        ...

    async def fill_token(self, role_id: str) -> FillToken:
        """Snapshot the generations guarding a fill for role_id."""
        ...

    async def clear(self) -> None:
        """Drop both facets entirely."""
        ...

    async def clear_role(self, role_id: str) -> None:
        """Drop both facets for one role."""
        ...

    async def stats(self) -> CacheStats:
        """Return entry counts per facet."""
        ...
