"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from ambukit.core.container import get_authorization, get_policy_service

The container is organized into modules by concern:
- infrastructure: Logging, database, Redis, policy cache, audit sink
- repositories: Role and policy repositories
- authorization: Policy service, authorization engine, audit service

All factories are lru_cache singletons; call <factory>.cache_clear() in
tests to rebuild them.
"""

from ambukit.core.container.authorization import (
    get_audit_service,
    get_authorization,
    get_policy_service,
    init_authorization,
)
from ambukit.core.container.infrastructure import (
    get_audit,
    get_database,
    get_logger,
    get_policy_cache,
    get_redis_client,
)
from ambukit.core.container.repositories import (
    get_policy_repository,
    get_role_repository,
)

__all__ = [
    # Infrastructure
    "get_logger",
    "get_database",
    "get_redis_client",
    "get_policy_cache",
    "get_audit",
    # Repositories
    "get_role_repository",
    "get_policy_repository",
    # Authorization
    "get_policy_service",
    "get_authorization",
    "get_audit_service",
    "init_authorization",
]
