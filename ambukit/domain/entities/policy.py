"""Policy domain entity.

One permission record per (role, entity) pair holding four independent
CRUD flags. Flags are never derived from each other: update does not imply
read, delete does not imply update.
"""

from dataclasses import dataclass
from datetime import datetime

from ambukit.domain.enums import ActionKind, EntityKind
from ambukit.domain.value_objects import PermissionSet

# Action → flag attribute dispatch table
_ACTION_FLAGS: dict[ActionKind, str] = {
    ActionKind.CREATE: "can_create",
    ActionKind.READ: "can_read",
    ActionKind.UPDATE: "can_update",
    ActionKind.DELETE: "can_delete",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class Policy:
    """Permission record for one (role, entity) pair.

    Attributes:
        role_id: Owning role.
        entity: Entity type the flags apply to.
        can_create: Create permission.
        can_read: Read permission.
        can_update: Update permission.
        can_delete: Delete permission.
        id: Opaque identifier assigned by the store (None before save).
        created_at: Creation timestamp (set by the store).
        updated_at: Last update timestamp (set by the store).

    Example:
        >>> policy = Policy(role_id="r1", entity=EntityKind.KIT_ITEM,
        ...                 can_read=True, can_update=True)
        >>> policy.has_permission(ActionKind.UPDATE)
        True
        >>> policy.has_permission(ActionKind.DELETE)
        False
    """

    role_id: str
    entity: EntityKind
    can_create: bool = False
    can_read: bool = False
    can_update: bool = False
    can_delete: bool = False
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_permission(self, action: ActionKind) -> bool:
        """Return the flag matching the action."""
        return bool(getattr(self, _ACTION_FLAGS[action]))

    @property
    def has_full_access(self) -> bool:
        """True when all four flags are set."""
        return self.permissions.has_full_access

    @property
    def is_read_only(self) -> bool:
        """True when only can_read is set."""
        return self.permissions.is_read_only

    @property
    def permissions(self) -> PermissionSet:
        """The four flags as a PermissionSet."""
        return PermissionSet(
            can_create=self.can_create,
            can_read=self.can_read,
            can_update=self.can_update,
            can_delete=self.can_delete,
        )
