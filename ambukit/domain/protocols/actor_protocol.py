"""Actor protocol: the minimal read-only view the engine needs.

Any object with a `role_id` attribute works (the Actor entity, an ORM user
row, a session principal). The engine reads nothing else.
"""

from typing import Protocol


class ActorProtocol(Protocol):
    """Read-only actor view."""

    @property
    def role_id(self) -> str | None:
        """Assigned role identifier, or None."""
        ...
