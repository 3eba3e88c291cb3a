"""Policy service: cached access to the role registry and policy store.

Read path (never raises):
    get_role / get_policies consult the policy cache first. On a miss they
    take a fill token, fetch from the repository and store the result,
    including empty lists and "role not found". A repository failure is
    logged and surfaces as None / [] WITHOUT being cached, so the next call
    retries the store.

Write path (Result types):
    create_role / create_policy / update_policy validate, write through the
    repositories and keep the cache coherent (put on create_role, per-role
    invalidation on policy writes).

Usage:
    service = PolicyService(role_repo, policy_repo, cache, logger)
    policy = await service.get_policy(actor.role_id, EntityKind.KIT)
"""

from dataclasses import replace

from ambukit.core.enums import ErrorCode
from ambukit.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ambukit.core.result import Failure, Result, Success
from ambukit.domain.entities import Policy, Role
from ambukit.domain.enums import EntityKind, RoleKind
from ambukit.domain.errors import PolicyError
from ambukit.domain.protocols import (
    ActorProtocol,
    LoggerProtocol,
    PolicyCacheProtocol,
    PolicyRepository,
    RoleRepository,
)

# fill_token() key whose role generation is never bumped; used for bulk
# fills where only the global generation can be checked up front
_BULK_FILL_KEY = ""


class PolicyService:
    """Role registry and policy store access with an explicit cache.

    The cache is injected (built once in the container); this class holds
    no module-level state.

    Dependencies (injected via constructor):
        - RoleRepository: Role records
        - PolicyRepository: Policy records
        - PolicyCacheProtocol: Role/policy cache
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        role_repository: RoleRepository,
        policy_repository: PolicyRepository,
        cache: PolicyCacheProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize policy service with dependencies.

        Args:
            role_repository: Role registry port.
            policy_repository: Policy store port.
            cache: Policy cache (in-memory or Redis).
            logger: Structured logger.
        """
        self._roles = role_repository
        self._policies = policy_repository
        self._cache = cache
        self._logger = logger

    # =========================================================================
    # Role registry
    # =========================================================================

    async def get_all_roles(self) -> list[Role]:
        """Return every role in store order and fill the role cache.

        Returns:
            list[Role]: All roles, or [] if the store failed.
        """
        bulk_token = await self._cache.fill_token(_BULK_FILL_KEY)
        try:
            roles = await self._roles.find_all()
        except Exception as e:
            self._logger.error("roles_fetch_error", error=e)
            return []

        for role in roles:
            if role.id is None:
                continue
            token = await self._cache.fill_token(role.id)
            if token.epoch != bulk_token.epoch:
                # Global clear raced the fetch
                break
            await self._cache.set_role(role.id, role, token=token)

        return roles

    async def get_role(self, role_id: str | None) -> Role | None:
        """Resolve a role by ID (cache-backed).

        Args:
            role_id: Role identifier; None or "" resolve to None.

        Returns:
            Role | None: The role, or None if absent or the store failed.
        """
        if not role_id:
            return None

        hit = await self._cache.get_role(role_id)
        if hit is not None:
            self._logger.debug("role_cache_hit", role_id=role_id)
            return hit.value

        token = await self._cache.fill_token(role_id)
        try:
            role = await self._roles.find_by_id(role_id)
        except Exception as e:
            # Fail closed, and leave the cache empty so the next call retries
            self._logger.error("role_fetch_error", error=e, role_id=role_id)
            return None

        await self._cache.set_role(role_id, role, token=token)
        return role

    async def get_role_by_kind(self, kind: RoleKind) -> Role | None:
        """First role of a kind in store order (uncached, administrative)."""
        try:
            roles = await self._roles.find_by_kind(kind)
        except Exception as e:
            self._logger.error("role_fetch_error", error=e, kind=kind.value)
            return None
        return roles[0] if roles else None

    async def get_role_kind(self, actor: ActorProtocol | None) -> RoleKind | None:
        """Kind of the actor's role, or None if unresolvable."""
        if actor is None:
            return None
        role = await self.get_role(actor.role_id)
        return role.kind if role is not None else None

    # =========================================================================
    # Policy store
    # =========================================================================

    async def get_policies(self, role_id: str | None) -> list[Policy]:
        """Return a role's policies in store order (cache-backed).

        Args:
            role_id: Role identifier; None or "" yield [].

        Returns:
            list[Policy]: Possibly empty; [] if the store failed.
        """
        if not role_id:
            return []

        hit = await self._cache.get_policies(role_id)
        if hit is not None:
            self._logger.debug(
                "policies_cache_hit", role_id=role_id, count=len(hit.value)
            )
            return hit.value

        token = await self._cache.fill_token(role_id)
        try:
            policies = await self._policies.find_by_role(role_id)
        except Exception as e:
            self._logger.error("policies_fetch_error", error=e, role_id=role_id)
            return []

        await self._cache.set_policies(role_id, policies, token=token)
        return policies

    async def get_policy(
        self, role_id: str | None, entity: EntityKind
    ) -> Policy | None:
        """First policy of the role for entity, or None."""
        for policy in await self.get_policies(role_id):
            if policy.entity == entity:
                return policy
        return None

    # =========================================================================
    # Cache management
    # =========================================================================

    async def clear_cache(self, role_id: str | None = None) -> None:
        """Invalidate one role's entries, or everything when role_id is None."""
        if role_id:
            await self._cache.clear_role(role_id)
            self._logger.info("policy_cache_cleared", role_id=role_id)
        else:
            await self._cache.clear()
            self._logger.info("policy_cache_cleared", scope="all")

    async def preload_common_data(self) -> None:
        """Warm the cache: every role, then every role's policies."""
        roles = await self.get_all_roles()
        for role in roles:
            await self.get_policies(role.id)

        stats = await self._cache.stats()
        self._logger.info(
            "policy_cache_preloaded",
            roles=stats.roles,
            policy_sets=stats.policy_sets,
        )

    # =========================================================================
    # Administrative writes
    # =========================================================================

    async def create_role(
        self, kind: RoleKind, display_name: str
    ) -> Result[Role, DomainError]:
        """Create a role; at most one role per kind.

        Args:
            kind: Role kind.
            display_name: Human-readable name (must not be blank).

        Returns:
            Success(Role) with its store-assigned ID.
            Failure(ValidationError) for a blank display name.
            Failure(ConflictError) if a role of that kind exists.
            Failure(PolicyError) if the store failed.
        """
        name = display_name.strip()
        if not name:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_DISPLAY_NAME,
                    message="Role display name must not be blank",
                    field="display_name",
                )
            )

        try:
            if await self._roles.find_by_kind(kind):
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.ROLE_ALREADY_EXISTS,
                        message=f"A {kind.value} role already exists",
                        resource_type="role",
                        conflicting_field="kind",
                    )
                )
            role = await self._roles.save(Role(kind=kind, display_name=name))
        except Exception as e:
            self._logger.error("role_create_error", error=e, kind=kind.value)
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_ERROR,
                    message="Failed to create role",
                    details={"kind": kind.value, "error_type": type(e).__name__},
                )
            )

        if role.id is None:
            self._logger.error("role_create_error", kind=kind.value, reason="role_without_id")
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_ERROR,
                    message="Role store returned a role without an ID",
                    details={"kind": kind.value},
                )
            )

        await self._cache.set_role(role.id, role)
        self._logger.info("role_created", role_id=role.id, kind=kind.value)
        return Success(value=role)

    async def create_policy(
        self,
        role_id: str,
        entity: EntityKind,
        *,
        can_create: bool = False,
        can_read: bool = False,
        can_update: bool = False,
        can_delete: bool = False,
    ) -> Result[Policy, DomainError]:
        """Create the policy for (role_id, entity).

        Returns:
            Success(Policy) with its store-assigned ID.
            Failure(NotFoundError) if the role does not exist.
            Failure(ConflictError) if the role already has a policy for entity.
            Failure(PolicyError) if the store failed.
        """
        try:
            if await self._roles.find_by_id(role_id) is None:
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.ROLE_NOT_FOUND,
                        message="Role not found",
                        resource_type="role",
                        resource_id=role_id,
                    )
                )
            if await self._policies.find_by_role_and_entity(role_id, entity):
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.POLICY_ALREADY_EXISTS,
                        message=f"Role already has a policy for {entity.value}",
                        resource_type="policy",
                        conflicting_field="entity",
                    )
                )
            policy = await self._policies.save(
                Policy(
                    role_id=role_id,
                    entity=entity,
                    can_create=can_create,
                    can_read=can_read,
                    can_update=can_update,
                    can_delete=can_delete,
                )
            )
        except Exception as e:
            self._logger.error(
                "policy_create_error", error=e, role_id=role_id, entity=entity.value
            )
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_ERROR,
                    message="Failed to create policy",
                    details={
                        "role_id": role_id,
                        "entity": entity.value,
                        "error_type": type(e).__name__,
                    },
                )
            )

        await self._cache.clear_role(role_id)
        self._logger.info(
            "policy_created",
            policy_id=policy.id,
            role_id=role_id,
            entity=entity.value,
        )
        return Success(value=policy)

    async def update_policy(
        self,
        policy_id: str,
        *,
        can_create: bool | None = None,
        can_read: bool | None = None,
        can_update: bool | None = None,
        can_delete: bool | None = None,
    ) -> Result[Policy, DomainError]:
        """Update some of a policy's flags; None leaves a flag unchanged.

        Returns:
            Success(Policy) with the stored flags.
            Failure(NotFoundError) if the policy does not exist.
            Failure(PolicyError) if the store failed.
        """
        changes = {
            name: value
            for name, value in (
                ("can_create", can_create),
                ("can_read", can_read),
                ("can_update", can_update),
                ("can_delete", can_delete),
            )
            if value is not None
        }

        try:
            existing = await self._policies.find_by_id(policy_id)
            if existing is None:
                return Failure(error=self._policy_not_found(policy_id))
            policy = await self._policies.update(replace(existing, **changes))
        except LookupError:
            # Deleted between read and write
            return Failure(error=self._policy_not_found(policy_id))
        except Exception as e:
            self._logger.error("policy_update_error", error=e, policy_id=policy_id)
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_ERROR,
                    message="Failed to update policy",
                    details={"policy_id": policy_id, "error_type": type(e).__name__},
                )
            )

        await self._cache.clear_role(policy.role_id)
        self._logger.info(
            "policy_updated",
            policy_id=policy_id,
            role_id=policy.role_id,
            entity=policy.entity.value,
            changed=sorted(changes),
        )
        return Success(value=policy)

    @staticmethod
    def _policy_not_found(policy_id: str) -> NotFoundError:
        return NotFoundError(
            code=ErrorCode.POLICY_NOT_FOUND,
            message="Policy not found",
            resource_type="policy",
            resource_id=policy_id,
        )
