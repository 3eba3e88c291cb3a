"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error value in the system. Errors
flow through Result types as data; they are never raised.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class PolicyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass
from typing import Any

from ambukit.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
