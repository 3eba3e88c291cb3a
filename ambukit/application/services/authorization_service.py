"""Authorization service: the RBAC decision point.

Answers "may this actor perform this action on this entity type?" from
policy data alone. Role kinds never grant anything by themselves.

Decision algorithm (evaluate):
    1. No actor                      → deny (no_actor)
    2. actor.role_id None or ""      → deny (no_role)
    3. Role not resolvable           → deny (role_not_found)
    4. No policy for the entity      → deny (no_policy)
    5. policy.has_permission(action) → grant, or deny (policy_denies)

Error Handling:
    Fail-closed and never raises. Store outages surface from PolicyService
    as "role not found" / "no policy" and therefore as denials.

Side effects:
    None besides one structured log event per decision. The service never
    writes to the store and never calls the audit sink.

Usage:
    authz = get_authorization()
    if await authz.can_update_stock(actor):
        ...
    match await authz.require(ActionKind.DELETE, EntityKind.KIT, actor):
        case Failure(error=error):
            return Failure(error=error)
"""

from ambukit.application.services.policy_service import PolicyService
from ambukit.core.enums import ErrorCode
from ambukit.core.errors import AuthorizationError
from ambukit.core.result import Failure, Result, Success
from ambukit.domain.enums import ActionKind, DenialReason, EntityKind, RoleKind
from ambukit.domain.protocols import ActorProtocol, LoggerProtocol
from ambukit.domain.value_objects import AuthorizationDecision, PermissionSet

# Denial reason → error code surfaced by require()
_DENIAL_ERROR_CODES: dict[DenialReason, ErrorCode] = {
    DenialReason.NO_ACTOR: ErrorCode.USER_NOT_AUTHENTICATED,
    DenialReason.NO_ROLE: ErrorCode.ROLE_NOT_FOUND,
    DenialReason.ROLE_NOT_FOUND: ErrorCode.ROLE_NOT_FOUND,
    DenialReason.NO_POLICY: ErrorCode.POLICY_NOT_FOUND,
    DenialReason.POLICY_DENIES: ErrorCode.PERMISSION_DENIED,
}

_DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.NO_ACTOR: "No authenticated user",
    DenialReason.NO_ROLE: "User has no role assigned",
    DenialReason.ROLE_NOT_FOUND: "User role not found",
    DenialReason.NO_POLICY: "No policy defined for this entity",
    DenialReason.POLICY_DENIES: "Permission denied",
}


class AuthorizationService:
    """Policy-driven implementation of AuthorizationProtocol.

    Note: Does NOT inherit from AuthorizationProtocol (structural typing).

    Attributes:
        _policies: Cached role/policy access.
        _logger: Structured logger.
    """

    def __init__(self, policy_service: PolicyService, logger: LoggerProtocol) -> None:
        """Initialize authorization service.

        Args:
            policy_service: Role registry and policy store access.
            logger: Structured logger.
        """
        self._policies = policy_service
        self._logger = logger

    # =========================================================================
    # Core decision
    # =========================================================================

    async def evaluate(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> AuthorizationDecision:
        """Run the decision algorithm and keep the denial reason.

        Args:
            action: Requested action.
            entity: Requested entity type.
            actor: Acting user (None when nobody is signed in).

        Returns:
            AuthorizationDecision: allowed flag plus reason on denial.
        """
        decision = await self._decide(action, entity, actor)
        self._logger.info(
            "authorization_check",
            permission=decision.permission,
            role_id=decision.role_id,
            allowed=decision.allowed,
            reason=decision.reason.value if decision.reason else None,
        )
        return decision

    async def _decide(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> AuthorizationDecision:
        if actor is None:
            return AuthorizationDecision.deny(action, entity, DenialReason.NO_ACTOR)

        role_id = actor.role_id
        if not role_id:
            return AuthorizationDecision.deny(action, entity, DenialReason.NO_ROLE)

        if await self._policies.get_role(role_id) is None:
            return AuthorizationDecision.deny(
                action, entity, DenialReason.ROLE_NOT_FOUND, role_id=role_id
            )

        policy = await self._policies.get_policy(role_id, entity)
        if policy is None:
            return AuthorizationDecision.deny(
                action, entity, DenialReason.NO_POLICY, role_id=role_id
            )

        if policy.has_permission(action):
            return AuthorizationDecision.grant(action, entity, role_id=role_id)
        return AuthorizationDecision.deny(
            action, entity, DenialReason.POLICY_DENIES, role_id=role_id
        )

    async def allowed(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> bool:
        """Return True if actor may perform action on entity."""
        return (await self.evaluate(action, entity, actor)).allowed

    async def require(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> Result[None, AuthorizationError]:
        """Convert a denial into a typed AuthorizationError.

        Returns:
            Success(None) if allowed, otherwise Failure(AuthorizationError)
            whose code follows the denial reason.
        """
        decision = await self.evaluate(action, entity, actor)
        if decision.allowed:
            return Success(value=None)

        reason = decision.reason or DenialReason.POLICY_DENIES
        return Failure(
            error=AuthorizationError(
                code=_DENIAL_ERROR_CODES[reason],
                message=_DENIAL_MESSAGES[reason],
                required_permission=decision.permission,
                reason=reason.value,
                details={"role_id": decision.role_id} if decision.role_id else None,
            )
        )

    # =========================================================================
    # CRUD accessors
    # =========================================================================

    async def can_create(self, entity: EntityKind, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.CREATE, entity, actor)

    async def can_read(self, entity: EntityKind, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.READ, entity, actor)

    async def can_update(self, entity: EntityKind, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.UPDATE, entity, actor)

    async def can_delete(self, entity: EntityKind, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.DELETE, entity, actor)

    async def permissions(
        self, entity: EntityKind, actor: ActorProtocol | None
    ) -> PermissionSet:
        """All four flags for entity, each computed through allowed()."""
        return PermissionSet(
            can_create=await self.can_create(entity, actor),
            can_read=await self.can_read(entity, actor),
            can_update=await self.can_update(entity, actor),
            can_delete=await self.can_delete(entity, actor),
        )

    # =========================================================================
    # Business rules (all derived from policy data)
    # =========================================================================

    async def can_create_kits(self, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.CREATE, EntityKind.KIT, actor)

    async def can_create_vehicles(self, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.CREATE, EntityKind.VEHICLE, actor)

    async def can_edit_thresholds(self, actor: ActorProtocol | None) -> bool:
        """Min/max stock thresholds live on kit items."""
        return await self.allowed(ActionKind.UPDATE, EntityKind.KIT_ITEM, actor)

    async def can_manage_users(self, actor: ActorProtocol | None) -> bool:
        """Requires both create and delete on user."""
        return await self.allowed(
            ActionKind.CREATE, EntityKind.USER, actor
        ) and await self.allowed(ActionKind.DELETE, EntityKind.USER, actor)

    async def can_update_stock(self, actor: ActorProtocol | None) -> bool:
        return await self.allowed(ActionKind.UPDATE, EntityKind.KIT_ITEM, actor)

    async def user_management(self, actor: ActorProtocol | None) -> PermissionSet:
        return await self.permissions(EntityKind.USER, actor)

    async def permission_matrix(
        self, actor: ActorProtocol | None
    ) -> dict[EntityKind, PermissionSet]:
        """PermissionSet for every entity kind (diagnostics)."""
        return {entity: await self.permissions(entity, actor) for entity in EntityKind}

    # =========================================================================
    # Role-kind checks
    # =========================================================================

    async def is_programmer(self, actor: ActorProtocol | None) -> bool:
        return await self._policies.get_role_kind(actor) == RoleKind.PROGRAMMER

    async def is_logistics(self, actor: ActorProtocol | None) -> bool:
        return await self._policies.get_role_kind(actor) == RoleKind.LOGISTICS

    async def is_sanitary(self, actor: ActorProtocol | None) -> bool:
        return await self._policies.get_role_kind(actor) == RoleKind.SANITARY
