"""Domain value objects for authorization."""

from ambukit.domain.value_objects.authorization_decision import AuthorizationDecision
from ambukit.domain.value_objects.permission_set import PermissionSet

__all__ = ["AuthorizationDecision", "PermissionSet"]
