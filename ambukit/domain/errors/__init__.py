"""Domain errors package.

Usage:
    from ambukit.domain.errors import AuditError, PolicyError
"""

from ambukit.domain.errors.audit_error import AuditError
from ambukit.domain.errors.policy_error import PolicyError

__all__ = ["AuditError", "PolicyError"]
