"""Role kinds for RBAC authorization.

Every role record carries exactly one kind. The kind is a discriminator
for display and role checks (is_programmer, ...); permissions themselves
always come from policy records, never from the kind.

Kinds:
    - programmer: Technical administrator, normally full access
    - logistics: Manages kits, vehicles, bases and catalog
    - sanitary: Field staff, reads inventory and updates stock

Usage:
    from ambukit.domain.enums import RoleKind

    role = await policy_service.get_role(actor.role_id)
    if role is not None and role.kind == RoleKind.LOGISTICS:
        ...
"""

from enum import Enum


class RoleKind(str, Enum):
    """Closed set of role kinds.

    String Enum:
        Values are the raw strings persisted in the backing store.
    """

    PROGRAMMER = "programmer"
    LOGISTICS = "logistics"
    SANITARY = "sanitary"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role kind values as strings.

        Returns:
            list[str]: ['programmer', 'logistics', 'sanitary'].
        """
        return [kind.value for kind in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role kind.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid role kind.
        """
        return value in cls.values()
