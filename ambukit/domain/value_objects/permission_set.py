"""PermissionSet value object.

The four CRUD flags for one (actor or role, entity) pair, as returned by the
batch accessor AuthorizationService.permissions().
"""

from dataclasses import dataclass

from ambukit.domain.enums import ActionKind


@dataclass(frozen=True, slots=True, kw_only=True)
class PermissionSet:
    """Immutable set of CRUD flags.

    Attributes:
        can_create: Create permission.
        can_read: Read permission.
        can_update: Update permission.
        can_delete: Delete permission.

    Example:
        >>> perms = PermissionSet(can_create=False, can_read=True,
        ...                       can_update=True, can_delete=False)
        >>> perms.allows(ActionKind.UPDATE)
        True
        >>> PermissionSet.none().allows(ActionKind.READ)
        False
    """

    can_create: bool = False
    can_read: bool = False
    can_update: bool = False
    can_delete: bool = False

    @classmethod
    def none(cls) -> "PermissionSet":
        """All flags False (the fail-closed result)."""
        return cls()

    @classmethod
    def full(cls) -> "PermissionSet":
        """All flags True."""
        return cls(can_create=True, can_read=True, can_update=True, can_delete=True)

    @classmethod
    def from_actions(cls, actions: dict[ActionKind, bool]) -> "PermissionSet":
        """Build from an action → flag mapping (missing actions are False)."""
        return cls(
            can_create=actions.get(ActionKind.CREATE, False),
            can_read=actions.get(ActionKind.READ, False),
            can_update=actions.get(ActionKind.UPDATE, False),
            can_delete=actions.get(ActionKind.DELETE, False),
        )

    def allows(self, action: ActionKind) -> bool:
        """Return the flag for one action."""
        return self.as_dict()[action]

    def as_dict(self) -> dict[ActionKind, bool]:
        """Return the flags keyed by action."""
        return {
            ActionKind.CREATE: self.can_create,
            ActionKind.READ: self.can_read,
            ActionKind.UPDATE: self.can_update,
            ActionKind.DELETE: self.can_delete,
        }

    @property
    def has_full_access(self) -> bool:
        """True when every flag is set."""
        return self.can_create and self.can_read and self.can_update and self.can_delete

    @property
    def is_read_only(self) -> bool:
        """True when only can_read is set."""
        return (
            self.can_read
            and not self.can_create
            and not self.can_update
            and not self.can_delete
        )
