"""AuthorizationDecision value object.

Result of AuthorizationService.evaluate(): the boolean outcome plus the
reason for a denial. The boolean is the contract; the reason is
diagnostics only.
"""

from dataclasses import dataclass

from ambukit.domain.enums import ActionKind, DenialReason, EntityKind


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationDecision:
    """Outcome of one authorization check.

    Attributes:
        allowed: True if the action is permitted.
        action: Requested action.
        entity: Requested entity type.
        reason: Why the check was denied (None when allowed).
        role_id: Role the decision was evaluated against, if any.
    """

    allowed: bool
    action: ActionKind
    entity: EntityKind
    reason: DenialReason | None = None
    role_id: str | None = None

    @classmethod
    def grant(
        cls, action: ActionKind, entity: EntityKind, *, role_id: str
    ) -> "AuthorizationDecision":
        """Build a positive decision."""
        return cls(allowed=True, action=action, entity=entity, role_id=role_id)

    @classmethod
    def deny(
        cls,
        action: ActionKind,
        entity: EntityKind,
        reason: DenialReason,
        *,
        role_id: str | None = None,
    ) -> "AuthorizationDecision":
        """Build a negative decision with its reason."""
        return cls(
            allowed=False,
            action=action,
            entity=entity,
            reason=reason,
            role_id=role_id,
        )

    @property
    def permission(self) -> str:
        """Permission string in "entity:action" form."""
        return f"{self.entity.value}:{self.action.value}"

    def __bool__(self) -> bool:
        return self.allowed
