"""Infrastructure enums package.

Usage:
    from ambukit.infrastructure.enums import InfrastructureErrorCode
"""

from ambukit.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
