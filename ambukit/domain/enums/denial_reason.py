"""Reasons attached to a negative authorization decision.

The boolean contract of the engine conflates every denial into False.
DenialReason keeps the distinction available for logging and for call
sites that want to surface a more precise error.
"""

from enum import Enum


class DenialReason(str, Enum):
    """Why an authorization check was denied."""

    NO_ACTOR = "no_actor"
    """No actor was supplied (nobody signed in)."""

    NO_ROLE = "no_role"
    """The actor has no role_id (None or empty string)."""

    ROLE_NOT_FOUND = "role_not_found"
    """The actor's role_id does not resolve to a role record."""

    NO_POLICY = "no_policy"
    """The role has no policy record for the requested entity."""

    POLICY_DENIES = "policy_denies"
    """The policy exists but its flag for the action is False."""
