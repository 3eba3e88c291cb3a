"""Role domain entity.

A named permission profile that actors are assigned to. The role itself
grants nothing: its policies do.

Invariants:
    - kind is immutable after creation (frozen dataclass).
    - id is assigned by the backing store on creation (None before save).
"""

from dataclasses import dataclass
from datetime import datetime

from ambukit.domain.enums import RoleKind


@dataclass(frozen=True, slots=True, kw_only=True)
class Role:
    """Role definition.

    Attributes:
        id: Opaque identifier assigned by the store (None before save).
        kind: Role discriminator (programmer, logistics, sanitary).
        display_name: Human-readable name ("Logística").
        created_at: When the role was created (set by the store).
        updated_at: When the role was last updated (set by the store).

    Example:
        >>> role = Role(kind=RoleKind.SANITARY, display_name="Sanitario")
        >>> role.id is None
        True
    """

    kind: RoleKind
    display_name: str
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
