"""Application services.

Usage:
    from ambukit.application.services import AuthorizationService, PolicyService
"""

from ambukit.application.services.audit_service import AuditService
from ambukit.application.services.authorization_service import AuthorizationService
from ambukit.application.services.policy_service import PolicyService

__all__ = ["AuditService", "AuthorizationService", "PolicyService"]
