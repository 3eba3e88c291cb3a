"""Authorization dependency factories.

Policy service, authorization engine and audit service singletons, plus
the startup routine that prepares them.

Usage:
    # Application startup
    await init_authorization(seed=True)

    # Anywhere afterwards
    authz = get_authorization()
    if await authz.can_create_kits(actor):
        ...
"""

from functools import lru_cache

from ambukit.application.services import (
    AuditService,
    AuthorizationService,
    PolicyService,
)
from ambukit.core.container.infrastructure import (
    get_audit,
    get_database,
    get_logger,
    get_policy_cache,
)
from ambukit.core.container.repositories import (
    get_policy_repository,
    get_role_repository,
)
from ambukit.core.result import Failure


# ============================================================================
# Authorization (policy-driven RBAC)
# ============================================================================


@lru_cache()
def get_policy_service() -> PolicyService:
    """Get policy service singleton (owns the process-wide cache)."""
    return PolicyService(
        role_repository=get_role_repository(),
        policy_repository=get_policy_repository(),
        cache=get_policy_cache(),
        logger=get_logger(),
    )


@lru_cache()
def get_authorization() -> AuthorizationService:
    """Get authorization service singleton.

    Returns:
        AuthorizationService implementing AuthorizationProtocol.
    """
    return AuthorizationService(
        policy_service=get_policy_service(),
        logger=get_logger(),
    )


@lru_cache()
def get_audit_service() -> AuditService:
    """Get audit service singleton."""
    return AuditService(audit=get_audit(), logger=get_logger())


async def init_authorization(*, seed: bool = False, preload: bool = True) -> None:
    """Prepare the authorization stack at application startup.

    Steps:
        1. Create missing tables.
        2. Optionally seed the default roles and policies (idempotent).
        3. Optionally warm the policy cache.

    Args:
        seed: Run the default RBAC seeder.
        preload: Preload every role and policy list into the cache.

    Raises:
        RuntimeError: If seeding fails.
    """
    from ambukit.infrastructure.persistence.seeds import seed_rbac_policies

    logger = get_logger()
    await get_database().create_all()

    if seed:
        result = await seed_rbac_policies(get_role_repository(), get_policy_repository())
        if isinstance(result, Failure):
            raise RuntimeError(f"RBAC seeding failed: {result.error.message}")
        # Seeder bypasses the service
        await get_policy_service().clear_cache()

    if preload:
        await get_policy_service().preload_common_data()

    logger.info("authorization_initialized", seeded=seed, preloaded=preload)
