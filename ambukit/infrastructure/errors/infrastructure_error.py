"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (database,
cache). They inherit from DomainError (not Exception) and flow through
Result types or structured log events; they are never raised.
"""

from dataclasses import dataclass

from ambukit.core.errors import DomainError
from ambukit.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Database-specific errors (wrapped SQLAlchemy exceptions)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Cache-specific errors (wrapped Redis exceptions).

    Attributes:
        details: Key, operation and original error.
    """

    pass
