"""Authorization protocol (port) for RBAC access control.

The single decision point for every (action, entity, actor) triple.

Usage:
    from ambukit.core.container import get_authorization

    authz = get_authorization()
    if not await authz.allowed(ActionKind.CREATE, EntityKind.KIT, actor):
        return Failure(AuthorizationError(...))
"""

from typing import Protocol

from ambukit.core.errors import AuthorizationError
from ambukit.core.result import Result
from ambukit.domain.enums import ActionKind, EntityKind
from ambukit.domain.protocols.actor_protocol import ActorProtocol
from ambukit.domain.value_objects import AuthorizationDecision, PermissionSet


class AuthorizationProtocol(Protocol):
    """Protocol for authorization engines.

    Error Handling:
        Fail-closed. Every method returns a value; none raises. Missing
        actor, role or policy, and store outages, all mean "denied".
    """

    async def allowed(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> bool:
        """Return True if actor may perform action on entity."""
        ...

    async def evaluate(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> AuthorizationDecision:
        """Same decision as allowed(), with the denial reason attached."""
        ...

    async def permissions(
        self, entity: EntityKind, actor: ActorProtocol | None
    ) -> PermissionSet:
        """All four flags for entity, each computed like allowed()."""
        ...

    async def require(
        self, action: ActionKind, entity: EntityKind, actor: ActorProtocol | None
    ) -> Result[None, AuthorizationError]:
        """Success(None) if allowed, Failure(AuthorizationError) otherwise."""
        ...
