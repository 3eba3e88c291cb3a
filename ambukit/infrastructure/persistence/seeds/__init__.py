"""Default data seeders."""

from ambukit.infrastructure.persistence.seeds.rbac_seeder import (
    DEFAULT_POLICIES,
    DEFAULT_ROLES,
    SeedSummary,
    seed_rbac_policies,
)

__all__ = ["DEFAULT_POLICIES", "DEFAULT_ROLES", "SeedSummary", "seed_rbac_policies"]
