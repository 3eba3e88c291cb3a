"""Process-local policy cache.

Dict-based implementation of PolicyCacheProtocol. A threading.Lock guards
every read and write, so the cache is safe to share between asyncio tasks
and threads. No method awaits while holding the lock.

Generations:
    _epoch is bumped by clear(), _role_epochs[role_id] by clear_role().
    A FillToken captures both; set_* compares under the lock and drops
    writes whose token is stale. clear() also empties _role_epochs: every
    older token carries the previous _epoch, so none can match afterwards.
    Between global clears the map holds one int per role ID ever cleared.
"""

import threading

from ambukit.domain.entities import Policy, Role
from ambukit.domain.protocols import CacheHit, CacheStats, FillToken


class InMemoryPolicyCache:
    """In-memory implementation of PolicyCacheProtocol.

    Note: Does NOT inherit from PolicyCacheProtocol (uses structural typing).

    Example:
        >>> cache = InMemoryPolicyCache()
        >>> token = await cache.fill_token("r1")
        >>> await cache.set_policies("r1", [], token=token)
        True
        >>> await cache.get_policies("r1")
        CacheHit(value=[])
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._roles: dict[str, Role | None] = {}
        self._policies: dict[str, list[Policy]] = {}
        self._epoch = 0
        self._role_epochs: dict[str, int] = {}

    def _current_token(self, role_id: str) -> FillToken:
        # Caller holds the lock
        return FillToken(epoch=self._epoch, role_epoch=self._role_epochs.get(role_id, 0))

    async def get_role(self, role_id: str) -> CacheHit[Role | None] | None:
        with self._lock:
            if role_id not in self._roles:
                return None
            return CacheHit(value=self._roles[role_id])

    async def set_role(
        self, role_id: str, role: Role | None, *, token: FillToken | None = None
    ) -> bool:
        with self._lock:
            if token is not None and token != self._current_token(role_id):
                return False
            self._roles[role_id] = role
            return True

    async def get_policies(self, role_id: str) -> CacheHit[list[Policy]] | None:
        with self._lock:
            if role_id not in self._policies:
                return None
            return CacheHit(value=list(self._policies[role_id]))

    async def set_policies(
        self,
        role_id: str,
        policies: list[Policy],
        *,
        token: FillToken | None = None,
    ) -> bool:
        with self._lock:
            if token is not None and token != self._current_token(role_id):
                return False
            self._policies[role_id] = list(policies)
            return True

    async def fill_token(self, role_id: str) -> FillToken:
        with self._lock:
            return self._current_token(role_id)

    async def clear(self) -> None:
        with self._lock:
            self._roles.clear()
            self._policies.clear()
            self._role_epochs.clear()
            self._epoch += 1

    async def clear_role(self, role_id: str) -> None:
        with self._lock:
            self._roles.pop(role_id, None)
            self._policies.pop(role_id, None)
            self._role_epochs[role_id] = self._role_epochs.get(role_id, 0) + 1

    async def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(roles=len(self._roles), policy_sets=len(self._policies))
