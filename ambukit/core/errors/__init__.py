"""Core errors package.

Usage:
    from ambukit.core.errors import DomainError, NotFoundError, AuthorizationError
"""

from ambukit.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ambukit.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
]
