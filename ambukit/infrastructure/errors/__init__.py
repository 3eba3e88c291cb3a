"""Infrastructure errors package.

Usage:
    from ambukit.infrastructure.errors import CacheError, DatabaseError
"""

from ambukit.infrastructure.errors.infrastructure_error import (
    CacheError,
    DatabaseError,
    InfrastructureError,
)

__all__ = [
    "InfrastructureError",
    "DatabaseError",
    "CacheError",
]
