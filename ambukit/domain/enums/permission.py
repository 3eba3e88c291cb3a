"""Permission components for RBAC authorization.

Defines the EntityKind and ActionKind enums. A permission check is always
an (action, entity) pair evaluated against the policy record that the
actor's role holds for that entity.

Usage:
    from ambukit.domain.enums import ActionKind, EntityKind

    allowed = await authz.allowed(ActionKind.UPDATE, EntityKind.KIT_ITEM, actor)
"""

from enum import Enum


class EntityKind(str, Enum):
    """Resource types that can be protected by authorization.

    String Enum:
        Values are the raw strings persisted in policy records, so they keep
        the camelCase spelling used by existing data (catalogItem, kitItem).
    """

    BASE = "base"
    """Ambulance base (station)."""

    VEHICLE = "vehicle"
    """Ambulance vehicle."""

    KIT = "kit"
    """Medical kit assigned to a vehicle."""

    CATALOG_ITEM = "catalogItem"
    """Catalog article (drug, consumable, device)."""

    KIT_ITEM = "kitItem"
    """Stock line of a catalog item inside a kit (quantity, thresholds)."""

    USER = "user"
    """Application user accounts."""

    CATEGORY = "category"
    """Catalog category."""

    UNIT = "unit"
    """Unit of measure."""

    AUDIT = "audit"
    """Audit log records."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all entity values as strings.

        Returns:
            list[str]: List of entity values.
        """
        return [entity.value for entity in cls]


class ActionKind(str, Enum):
    """Actions that can be performed on entities.

    Each action maps to exactly one independent boolean flag of a policy.
    """

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def values(cls) -> list[str]:
        """Get all action values as strings.

        Returns:
            list[str]: List of action values.
        """
        return [action.value for action in cls]
