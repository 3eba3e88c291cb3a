"""Core enums package.

Usage:
    from ambukit.core.enums import ErrorCode, Environment
"""

from ambukit.core.enums.environment import Environment
from ambukit.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
