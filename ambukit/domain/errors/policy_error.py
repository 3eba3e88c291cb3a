"""Policy store error types.

Returned by the administrative write path of PolicyService when the
backing store fails. Read paths never surface this error: they degrade to
empty results instead.

Usage:
    return Failure(PolicyError(
        code=ErrorCode.POLICY_STORE_ERROR,
        message="Failed to create policy",
        details={"role_id": role_id, "entity": entity.value},
    ))
"""

from dataclasses import dataclass

from ambukit.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyError(DomainError):
    """Role registry / policy store failure."""

    pass
