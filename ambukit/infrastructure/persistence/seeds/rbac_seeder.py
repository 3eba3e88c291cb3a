"""RBAC seeder for the role registry and policy store.

Seeds the three standard roles and their per-entity policies. Idempotent:
existing roles (by kind) and existing (role, entity) policies are skipped,
never overwritten, so it is safe to run on every deploy.

After initial seeding, role/policy changes go through PolicyService
(create_role, create_policy, update_policy) so the cache stays coherent.
The seeder writes straight to the repositories: run it before serving, or
clear the policy cache afterwards.
"""

from dataclasses import dataclass
from typing import TypeAlias

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ambukit.core.enums import ErrorCode
from ambukit.core.result import Failure, Result, Success
from ambukit.domain.entities import Policy, Role
from ambukit.domain.enums import EntityKind, RoleKind
from ambukit.domain.protocols import PolicyRepository, RoleRepository
from ambukit.infrastructure.enums import InfrastructureErrorCode
from ambukit.infrastructure.errors import DatabaseError

logger = structlog.get_logger(__name__)

DEFAULT_ROLES: dict[RoleKind, str] = {
    RoleKind.PROGRAMMER: "Programador",
    RoleKind.LOGISTICS: "Logística",
    RoleKind.SANITARY: "Sanitario",
}

# Format: (create, read, update, delete)
Flags: TypeAlias = tuple[bool, bool, bool, bool]

_FULL: Flags = (True, True, True, True)
_READ: Flags = (False, True, False, False)
_NONE: Flags = (False, False, False, False)

DEFAULT_POLICIES: dict[RoleKind, dict[EntityKind, Flags]] = {
    # programmer - full access on every entity
    RoleKind.PROGRAMMER: {entity: _FULL for entity in EntityKind},
    # logistics - no kit creation, no user creation/deletion
    RoleKind.LOGISTICS: {
        EntityKind.KIT: (False, True, True, True),
        EntityKind.KIT_ITEM: _FULL,
        EntityKind.CATALOG_ITEM: _FULL,
        EntityKind.VEHICLE: _FULL,
        EntityKind.BASE: _FULL,
        EntityKind.CATEGORY: _FULL,
        EntityKind.UNIT: _FULL,
        EntityKind.AUDIT: _READ,
        EntityKind.USER: (False, True, True, False),
    },
    # sanitary - stock control: read everything, update kit items only
    RoleKind.SANITARY: {
        EntityKind.KIT: _READ,
        EntityKind.KIT_ITEM: (False, True, True, False),
        EntityKind.CATALOG_ITEM: _READ,
        EntityKind.VEHICLE: _READ,
        EntityKind.BASE: _READ,
        EntityKind.CATEGORY: _READ,
        EntityKind.UNIT: _READ,
        EntityKind.AUDIT: _NONE,
        EntityKind.USER: _NONE,
    },
}


@dataclass(frozen=True, slots=True, kw_only=True)
class SeedSummary:
    """Counts reported by a seeding run."""

    roles_created: int
    policies_created: int
    policies_skipped: int

    @property
    def total_policies(self) -> int:
        return self.policies_created + self.policies_skipped


def _seed_failure(
    message: str, *, roles_created: int, policies_created: int
) -> Failure[DatabaseError]:
    return Failure(
        error=DatabaseError(
            code=ErrorCode.POLICY_STORE_ERROR,
            infrastructure_code=InfrastructureErrorCode.DATABASE_ERROR,
            message=message,
            details={
                "roles_created": roles_created,
                "policies_created": policies_created,
            },
        )
    )


async def seed_rbac_policies(
    roles: RoleRepository,
    policies: PolicyRepository,
) -> Result[SeedSummary, DatabaseError]:
    """Seed default roles and policies. Idempotent.

    Args:
        roles: Role registry repository.
        policies: Policy store repository.

    Returns:
        Success(SeedSummary) or Failure(DatabaseError) if the store failed
        part-way (already-written rows stay; rerun to finish).
    """
    roles_created = 0
    seeded_count = 0
    skipped_count = 0

    try:
        for kind, display_name in DEFAULT_ROLES.items():
            existing = await roles.find_by_kind(kind)
            if existing:
                role = existing[0]
            else:
                role = await roles.save(Role(kind=kind, display_name=display_name))
                roles_created += 1
            if role.id is None:
                logger.error("rbac_seeding_failed", kind=kind.value, reason="role_without_id")
                return _seed_failure(
                    f"RBAC seeding failed: {kind.value} role has no ID",
                    roles_created=roles_created,
                    policies_created=seeded_count,
                )

            for entity, (c, r, u, d) in DEFAULT_POLICIES[kind].items():
                if await policies.find_by_role_and_entity(role.id, entity):
                    skipped_count += 1
                    continue

                await policies.save(
                    Policy(
                        role_id=role.id,
                        entity=entity,
                        can_create=c,
                        can_read=r,
                        can_update=u,
                        can_delete=d,
                    )
                )
                seeded_count += 1

    except SQLAlchemyError as e:
        logger.error(
            "rbac_seeding_failed",
            error_type=type(e).__name__,
            error_message=str(e),
            seeded=seeded_count,
        )
        return _seed_failure(
            f"RBAC seeding failed: {str(e)}",
            roles_created=roles_created,
            policies_created=seeded_count,
        )

    summary = SeedSummary(
        roles_created=roles_created,
        policies_created=seeded_count,
        policies_skipped=skipped_count,
    )
    logger.info(
        "rbac_seeding_complete",
        roles_created=roles_created,
        seeded=seeded_count,
        skipped=skipped_count,
        total=summary.total_policies,
    )
    return Success(value=summary)
