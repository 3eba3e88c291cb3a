"""Result types for railway-oriented programming.

Operations that can fail for expected reasons (a duplicate role, a missing
policy, a store outage during an administrative write) return a Result
instead of raising. Callers pattern-match on the outcome.

Usage:
    result = await policy_service.create_role(RoleKind.LOGISTICS, "Logística")
    match result:
        case Success(value=role):
            print(f"Created role {role.id}")
        case Failure(error=error):
            print(f"Rejected: {error.message}")
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
