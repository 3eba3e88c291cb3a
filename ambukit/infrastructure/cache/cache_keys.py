"""Redis key layout for the policy cache.

Keys:
    {prefix}:role:{role_id}       JSON role document (or not-found marker)
    {prefix}:policies:{role_id}   JSON array of policy documents
    {prefix}:epoch                global generation (INCR on clear)
    {prefix}:epoch:{role_id}      per-role generation (INCR on clear_role)
"""


class PolicyCacheKeys:
    """Builds namespaced Redis keys.

    Args:
        prefix: Namespace without trailing colon ("authz").
    """

    def __init__(self, prefix: str = "authz") -> None:
        self.prefix = prefix

    def role(self, role_id: str) -> str:
        return f"{self.prefix}:role:{role_id}"

    def policies(self, role_id: str) -> str:
        return f"{self.prefix}:policies:{role_id}"

    @property
    def epoch(self) -> str:
        return f"{self.prefix}:epoch"

    def role_epoch(self, role_id: str) -> str:
        return f"{self.prefix}:epoch:{role_id}"

    @property
    def role_pattern(self) -> str:
        """SCAN pattern matching every cached role."""
        return f"{self.prefix}:role:*"

    @property
    def policies_pattern(self) -> str:
        """SCAN pattern matching every cached policy list."""
        return f"{self.prefix}:policies:*"
