"""Integration tests for the RBAC seeder against SQLite."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from ambukit.core.result import Failure, Success
from ambukit.domain.entities import Role
from ambukit.domain.enums import EntityKind, RoleKind
from ambukit.infrastructure.persistence.repositories import (
    PolicyRepository,
    RoleRepository,
)
from ambukit.infrastructure.persistence.seeds.rbac_seeder import (
    DEFAULT_POLICIES,
    seed_rbac_policies,
)

EXPECTED_POLICIES = sum(len(entities) for entities in DEFAULT_POLICIES.values())


@pytest.fixture
def roles(sqlite_database) -> RoleRepository:
    return RoleRepository(sqlite_database)


@pytest.fixture
def policies(sqlite_database) -> PolicyRepository:
    return PolicyRepository(sqlite_database)


@pytest.mark.integration
class TestSeedRbacPolicies:
    async def test_fresh_seed(self, roles, policies):
        result = await seed_rbac_policies(roles, policies)

        assert isinstance(result, Success)
        assert result.value.roles_created == 3
        assert result.value.policies_created == EXPECTED_POLICIES == 27
        assert result.value.policies_skipped == 0
        assert {r.kind for r in await roles.find_all()} == set(RoleKind)

    async def test_idempotent(self, roles, policies):
        await seed_rbac_policies(roles, policies)

        result = await seed_rbac_policies(roles, policies)

        assert result.value.roles_created == 0
        assert result.value.policies_created == 0
        assert result.value.policies_skipped == EXPECTED_POLICIES
        assert len(await roles.find_all()) == 3

    async def test_existing_role_is_reused(self, roles, policies):
        existing = await roles.save(Role(kind=RoleKind.SANITARY, display_name="Custom"))

        result = await seed_rbac_policies(roles, policies)

        assert result.value.roles_created == 2
        assert len(await policies.find_by_role(existing.id)) == 9

    async def test_seeded_flags(self, roles, policies):
        await seed_rbac_policies(roles, policies)
        (logistics,) = await roles.find_by_kind(RoleKind.LOGISTICS)
        (sanitary,) = await roles.find_by_kind(RoleKind.SANITARY)

        (kit,) = await policies.find_by_role_and_entity(logistics.id, EntityKind.KIT)
        (item,) = await policies.find_by_role_and_entity(sanitary.id, EntityKind.KIT_ITEM)

        assert (kit.can_create, kit.can_read, kit.can_update, kit.can_delete) == (
            False, True, True, True,
        )
        assert (item.can_create, item.can_read, item.can_update, item.can_delete) == (
            False, True, True, False,
        )

    async def test_store_failure(self, roles, policies):
        roles.find_by_kind = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        result = await seed_rbac_policies(roles, policies)

        assert isinstance(result, Failure)
        assert result.error.details == {"roles_created": 0, "policies_created": 0}

    async def test_saved_role_without_id(self, roles, policies):
        roles.save = AsyncMock(
            return_value=Role(kind=RoleKind.PROGRAMMER, display_name="Programador")
        )

        result = await seed_rbac_policies(roles, policies)

        assert isinstance(result, Failure)
        assert result.error.details == {"roles_created": 1, "policies_created": 0}
        assert "programmer" in result.error.message
