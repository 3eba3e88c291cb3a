"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console, structlog)
- Database (PostgreSQL / SQLite)
- Redis client (shared policy cache backend)
- Policy cache (memory / redis)
- Audit sink (SQL)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from ambukit.core.config import settings
from ambukit.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from ambukit.domain.protocols import (
        AuditProtocol,
        LoggerProtocol,
        PolicyCacheProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from ambukit.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level="DEBUG" if settings.debug else settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_redis_client() -> "Redis":
    """Get Redis client singleton (app-scoped, pooled).

    Only created when the redis policy cache backend is selected.
    """
    from redis.asyncio import ConnectionPool, Redis

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return Redis(connection_pool=pool)


@lru_cache()
def get_policy_cache() -> "PolicyCacheProtocol":
    """Get policy cache singleton (app-scoped).

    Container owns the choice of adapter (settings.policy_cache_backend):
        - 'memory': InMemoryPolicyCache (per process, default)
        - 'redis': RedisPolicyCache (shared between workers)

    Returns:
        Cache implementing PolicyCacheProtocol.
    """
    if settings.policy_cache_backend == "redis":
        from ambukit.infrastructure.cache.redis_policy_cache import RedisPolicyCache

        return RedisPolicyCache(
            redis_client=get_redis_client(),
            logger=get_logger(),
            prefix=settings.policy_cache_prefix,
        )

    from ambukit.infrastructure.cache.memory_policy_cache import InMemoryPolicyCache

    return InMemoryPolicyCache()


@lru_cache()
def get_audit() -> "AuditProtocol":
    """Get audit sink singleton (SQL, app-scoped)."""
    from ambukit.infrastructure.audit.sql_adapter import SqlAuditAdapter

    return SqlAuditAdapter(database=get_database())
