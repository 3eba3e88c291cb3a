"""Actor domain entity (partial user view).

Only the fields the authorization core and the audit trail need. User
management itself lives outside this package.

Note:
    `active` is carried for callers but is NOT consulted by the
    authorization engine. An inactive actor with a valid role resolves
    permissions normally; deactivation is enforced at sign-in.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Actor:
    """Read-only view of the user on whose behalf a check runs.

    Attributes:
        id: User identifier.
        username: Login name (recorded in audit entries).
        role_id: Assigned role (None when unassigned).
        full_name: Display name.
        active: Account active flag (not checked by the engine).
    """

    id: str
    username: str
    role_id: str | None = None
    full_name: str = ""
    active: bool = True
