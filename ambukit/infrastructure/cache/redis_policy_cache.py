"""Redis-backed policy cache shared between worker processes.

Implements PolicyCacheProtocol on top of redis.asyncio. Roles and policy
lists are stored as JSON documents; generation counters are plain Redis
integers (see cache_keys for the layout).

Architecture:
- Implements PolicyCacheProtocol without inheritance (structural typing)
- Guarded writes use WATCH/MULTI optimistic transactions on the
  generation keys; a concurrent clear aborts the write (WatchError)
- Fail-open: Redis errors become cache misses and dropped writes, logged
  as CacheError context. Authorization never breaks because of the cache.
"""

import json
from datetime import datetime
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from ambukit.core.enums import ErrorCode
from ambukit.domain.entities import Policy, Role
from ambukit.domain.enums import EntityKind, RoleKind
from ambukit.domain.protocols import CacheHit, CacheStats, FillToken, LoggerProtocol
from ambukit.infrastructure.cache.cache_keys import PolicyCacheKeys
from ambukit.infrastructure.enums import InfrastructureErrorCode
from ambukit.infrastructure.errors import CacheError

# Never equal to a real token: fills started while Redis was down never write
_UNAVAILABLE_TOKEN = FillToken(epoch=-1, role_epoch=-1)


def _dt_to_json(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt_from_json(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


def role_to_document(role: Role | None) -> dict[str, Any]:
    """Serialize a role lookup result (None = not-found marker)."""
    if role is None:
        return {"found": False}
    return {
        "found": True,
        "role": {
            "id": role.id,
            "kind": role.kind.value,
            "display_name": role.display_name,
            "created_at": _dt_to_json(role.created_at),
            "updated_at": _dt_to_json(role.updated_at),
        },
    }


def role_from_document(document: dict[str, Any]) -> Role | None:
    """Inverse of role_to_document."""
    if not document.get("found"):
        return None
    data = document["role"]
    return Role(
        id=data["id"],
        kind=RoleKind(data["kind"]),
        display_name=data["display_name"],
        created_at=_dt_from_json(data.get("created_at")),
        updated_at=_dt_from_json(data.get("updated_at")),
    )


def policy_to_document(policy: Policy) -> dict[str, Any]:
    return {
        "id": policy.id,
        "role_id": policy.role_id,
        "entity": policy.entity.value,
        "can_create": policy.can_create,
        "can_read": policy.can_read,
        "can_update": policy.can_update,
        "can_delete": policy.can_delete,
        "created_at": _dt_to_json(policy.created_at),
        "updated_at": _dt_to_json(policy.updated_at),
    }


def policy_from_document(data: dict[str, Any]) -> Policy:
    return Policy(
        id=data["id"],
        role_id=data["role_id"],
        entity=EntityKind(data["entity"]),
        can_create=data["can_create"],
        can_read=data["can_read"],
        can_update=data["can_update"],
        can_delete=data["can_delete"],
        created_at=_dt_from_json(data.get("created_at")),
        updated_at=_dt_from_json(data.get("updated_at")),
    )


class RedisPolicyCache:
    """Redis implementation of PolicyCacheProtocol.

    Note: Does NOT inherit from PolicyCacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
        _keys: Key builder for the configured prefix.
        _logger: Structured logger for degraded operations.
    """

    def __init__(
        self,
        redis_client: Redis,
        logger: LoggerProtocol,
        prefix: str = "authz",
    ) -> None:
        """Initialize Redis policy cache.

        Args:
            redis_client: Async Redis client instance.
            logger: Logger for fail-open diagnostics.
            prefix: Key namespace (settings.policy_cache_prefix).
        """
        self._redis = redis_client
        self._logger = logger
        self._keys = PolicyCacheKeys(prefix)

    def _degrade(
        self,
        operation: str,
        key: str,
        exc: Exception,
        infrastructure_code: InfrastructureErrorCode,
    ) -> CacheError:
        error = CacheError(
            code=ErrorCode.CACHE_UNAVAILABLE,
            infrastructure_code=infrastructure_code,
            message=f"Policy cache {operation} failed",
            details={"key": key, "operation": operation, "error": str(exc)},
        )
        self._logger.warning(
            "policy_cache_degraded",
            infrastructure_code=infrastructure_code.value,
            error_type=type(exc).__name__,
            **(error.details or {}),
        )
        return error

    async def _get_document(self, key: str) -> Any | None:
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            self._degrade("get", key, e, InfrastructureErrorCode.CACHE_GET_ERROR)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            self._degrade("decode", key, e, InfrastructureErrorCode.CACHE_DECODE_ERROR)
            return None

    async def _guarded_set(
        self, role_id: str, key: str, payload: str, token: FillToken | None
    ) -> bool:
        try:
            if token is None:
                await self._redis.set(key, payload)
                return True

            epoch_keys = (self._keys.epoch, self._keys.role_epoch(role_id))
            async with self._redis.pipeline(transaction=True) as pipe:
                await pipe.watch(*epoch_keys)
                current = self._to_token(await pipe.mget(*epoch_keys))
                if current != token:
                    await pipe.unwatch()
                    return False
                pipe.multi()
                pipe.set(key, payload)
                await pipe.execute()
            return True
        except WatchError:
            self._logger.debug("policy_cache_fill_dropped", key=key)
            return False
        except RedisError as e:
            self._degrade("set", key, e, InfrastructureErrorCode.CACHE_SET_ERROR)
            return False

    @staticmethod
    def _to_token(values: list[Any]) -> FillToken:
        epoch, role_epoch = values
        return FillToken(epoch=int(epoch or 0), role_epoch=int(role_epoch or 0))

    async def get_role(self, role_id: str) -> CacheHit[Role | None] | None:
        """Return the cached role lookup, or None on miss/Redis failure."""
        key = self._keys.role(role_id)
        document = await self._get_document(key)
        if document is None:
            return None
        try:
            return CacheHit(value=role_from_document(document))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            self._degrade("decode", key, e, InfrastructureErrorCode.CACHE_DECODE_ERROR)
            return None

    async def set_role(
        self, role_id: str, role: Role | None, *, token: FillToken | None = None
    ) -> bool:
        payload = json.dumps(role_to_document(role))
        return await self._guarded_set(role_id, self._keys.role(role_id), payload, token)

    async def get_policies(self, role_id: str) -> CacheHit[list[Policy]] | None:
        """Return the cached policy list, or None on miss/Redis failure."""
        key = self._keys.policies(role_id)
        document = await self._get_document(key)
        if document is None:
            return None
        try:
            if not isinstance(document, list):
                raise TypeError(f"expected a list, got {type(document).__name__}")
            return CacheHit(value=[policy_from_document(item) for item in document])
        except (KeyError, TypeError, ValueError) as e:
            self._degrade("decode", key, e, InfrastructureErrorCode.CACHE_DECODE_ERROR)
            return None

    async def set_policies(
        self,
        role_id: str,
        policies: list[Policy],
        *,
        token: FillToken | None = None,
    ) -> bool:
        payload = json.dumps([policy_to_document(p) for p in policies])
        return await self._guarded_set(
            role_id, self._keys.policies(role_id), payload, token
        )

    async def fill_token(self, role_id: str) -> FillToken:
        """Snapshot both generations; a sentinel token if Redis is down."""
        try:
            values = await self._redis.mget(
                self._keys.epoch, self._keys.role_epoch(role_id)
            )
        except RedisError as e:
            self._degrade(
                "fill_token",
                self._keys.role_epoch(role_id),
                e,
                InfrastructureErrorCode.CACHE_GET_ERROR,
            )
            return _UNAVAILABLE_TOKEN
        return self._to_token(values)

    async def clear(self) -> None:
        """Bump the global generation, then delete every cached entry."""
        try:
            await self._redis.incr(self._keys.epoch)
            for pattern in (self._keys.role_pattern, self._keys.policies_pattern):
                keys = [key async for key in self._redis.scan_iter(match=pattern)]
                if keys:
                    await self._redis.delete(*keys)
        except RedisError as e:
            self._degrade(
                "clear", self._keys.prefix, e, InfrastructureErrorCode.CACHE_DELETE_ERROR
            )

    async def clear_role(self, role_id: str) -> None:
        """Bump the role generation, then delete both facets for the role."""
        try:
            await self._redis.incr(self._keys.role_epoch(role_id))
            await self._redis.delete(
                self._keys.role(role_id), self._keys.policies(role_id)
            )
        except RedisError as e:
            self._degrade(
                "clear_role",
                self._keys.role(role_id),
                e,
                InfrastructureErrorCode.CACHE_DELETE_ERROR,
            )

    async def stats(self) -> CacheStats:
        """Count cached entries per facet (SCAN, diagnostics only)."""
        try:
            roles = [key async for key in self._redis.scan_iter(match=self._keys.role_pattern)]
            policy_sets = [
                key
                async for key in self._redis.scan_iter(match=self._keys.policies_pattern)
            ]
        except RedisError as e:
            self._degrade(
                "stats", self._keys.prefix, e, InfrastructureErrorCode.CACHE_GET_ERROR
            )
            return CacheStats(roles=0, policy_sets=0)
        return CacheStats(roles=len(roles), policy_sets=len(policy_sets))
