"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (blank display name, ...)
- NotFoundError: Role or policy not found
- ConflictError: Duplicate role kind, duplicate (role, entity) policy
- AuthenticationError: No authenticated actor
- AuthorizationError: Actor lacks permission for an action on an entity

Usage:
    from ambukit.core.errors import ConflictError
    from ambukit.core.enums import ErrorCode
    from ambukit.core.result import Failure

    return Failure(ConflictError(
        code=ErrorCode.ROLE_ALREADY_EXISTS,
        message="A logistics role already exists",
        resource_type="role",
        conflicting_field="kind",
    ))
"""

from dataclasses import dataclass

from ambukit.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (role, policy).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate role kind, duplicate policy).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (no signed-in actor)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (no permission).

    Attributes:
        required_permission: Permission that was required, as "entity:action".
        reason: Denial reason value (no_actor, no_role, role_not_found,
            no_policy, policy_denies).
    """

    required_permission: str | None = None
    reason: str | None = None
