"""Domain enums for authorization.

Available Enums:
    - RoleKind: Role discriminator (programmer, logistics, sanitary)
    - EntityKind: Resource types gated by authorization
    - ActionKind: CRUD actions on entities
    - DenialReason: Why an authorization decision was negative
"""

from ambukit.domain.enums.denial_reason import DenialReason
from ambukit.domain.enums.permission import ActionKind, EntityKind
from ambukit.domain.enums.role_kind import RoleKind

__all__ = [
    "ActionKind",
    "DenialReason",
    "EntityKind",
    "RoleKind",
]
