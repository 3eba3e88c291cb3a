"""Unit tests for AuthorizationService.

Tests cover:
- Fail-closed inputs (no actor, no role, unknown role, no policy)
- Flag-for-flag agreement with the stored policy
- evaluate() denial reasons and require() error codes
- permissions() / permission_matrix() consistency with allowed()
- Business-rule helpers and role-kind checks
- Role scenarios (programmer, logistics, sanitary)
- Store failures deny without poisoning the cache

Architecture:
- PolicyService over in-memory fake repositories (conftest)
"""

from dataclasses import replace

import pytest

from ambukit.core.enums import ErrorCode
from ambukit.core.errors import AuthorizationError
from ambukit.core.result import Failure, Success
from ambukit.domain.entities import Actor
from ambukit.domain.enums import ActionKind, DenialReason, EntityKind, RoleKind
from ambukit.domain.value_objects import PermissionSet

ALL_PAIRS = [(action, entity) for action in ActionKind for entity in EntityKind]


# =============================================================================
# Fail-closed inputs
# =============================================================================


@pytest.mark.unit
class TestFailClosed:
    """Missing data always means denial."""

    async def test_no_actor_denies_everything(self, authz):
        for action, entity in ALL_PAIRS:
            assert await authz.allowed(action, entity, None) is False

    @pytest.mark.parametrize("role_id", [None, ""])
    async def test_actor_without_role_denies_everything(
        self, authz, make_actor, role_id
    ):
        actor = make_actor(role_id)
        for action, entity in ALL_PAIRS:
            assert await authz.allowed(action, entity, actor) is False

    async def test_unknown_role_denies(self, authz, make_actor):
        actor = make_actor("does-not-exist")
        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is False

    async def test_no_policy_for_entity_denies_all_actions(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, True, True, True, True)
        actor = make_actor(role.id)

        for action in ActionKind:
            assert await authz.allowed(action, EntityKind.VEHICLE, actor) is False

    async def test_inactive_actor_is_not_checked(
        self, authz, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = Actor(id="u1", username="old", role_id=role.id, active=False)

        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is True


# =============================================================================
# Policy agreement
# =============================================================================


@pytest.mark.unit
class TestPolicyAgreement:
    """allowed(a, E) equals the policy flag for a, flags independent."""

    @pytest.mark.parametrize(
        "flags",
        [
            (False, False, False, False),
            (True, False, False, False),
            (False, True, True, False),
            (False, False, True, True),
            (True, True, True, True),
        ],
    )
    async def test_allowed_matches_flags(
        self, authz, make_actor, role_repo, policy_repo, flags
    ):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy = policy_repo.grant(role, EntityKind.KIT_ITEM, *flags)
        actor = make_actor(role.id)

        assert await authz.can_create(EntityKind.KIT_ITEM, actor) == policy.can_create
        assert await authz.can_read(EntityKind.KIT_ITEM, actor) == policy.can_read
        assert await authz.can_update(EntityKind.KIT_ITEM, actor) == policy.can_update
        assert await authz.can_delete(EntityKind.KIT_ITEM, actor) == policy.can_delete

    async def test_permissions_equals_individual_checks(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT_ITEM, read=True, update=True)
        actor = make_actor(role.id)

        perms = await authz.permissions(EntityKind.KIT_ITEM, actor)

        assert perms == PermissionSet.from_actions(
            {a: await authz.allowed(a, EntityKind.KIT_ITEM, actor) for a in ActionKind}
        )
        assert perms == PermissionSet(can_read=True, can_update=True)

    async def test_permissions_for_unresolvable_actor(self, authz, make_actor):
        assert await authz.permissions(EntityKind.KIT, None) == PermissionSet.none()
        assert await authz.permissions(EntityKind.KIT, make_actor("x")) == (
            PermissionSet.none()
        )

    async def test_repeated_checks_are_idempotent_and_cached(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)

        results = [
            await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) for _ in range(5)
        ]

        assert results == [True] * 5
        assert role_repo.calls["find_by_id"] == 1
        assert policy_repo.calls["find_by_role"] == 1

    async def test_duplicate_policies_first_match_wins(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        policy_repo.grant(role, EntityKind.KIT, True, True, True, True)
        actor = make_actor(role.id)

        assert await authz.allowed(ActionKind.CREATE, EntityKind.KIT, actor) is False
        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is True

    async def test_clear_cache_for_role_picks_up_policy_change(
        self, authz, policy_service, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy = policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)
        assert await authz.can_delete(EntityKind.KIT, actor) is False

        policy_repo.policies[0] = replace(policy, can_delete=True)
        # Still cached
        assert await authz.can_delete(EntityKind.KIT, actor) is False

        await policy_service.clear_cache(role_id=role.id)
        assert await authz.can_delete(EntityKind.KIT, actor) is True


# =============================================================================
# evaluate() / require()
# =============================================================================


@pytest.mark.unit
class TestEvaluate:
    """Test denial reasons."""

    async def test_reasons(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)

        async def reason(action, entity, who):
            return (await authz.evaluate(action, entity, who)).reason

        assert await reason(ActionKind.READ, EntityKind.KIT, None) is DenialReason.NO_ACTOR
        assert await reason(ActionKind.READ, EntityKind.KIT, make_actor(None)) is (
            DenialReason.NO_ROLE
        )
        assert await reason(ActionKind.READ, EntityKind.KIT, make_actor("ghost")) is (
            DenialReason.ROLE_NOT_FOUND
        )
        assert await reason(ActionKind.READ, EntityKind.USER, actor) is (
            DenialReason.NO_POLICY
        )
        assert await reason(ActionKind.DELETE, EntityKind.KIT, actor) is (
            DenialReason.POLICY_DENIES
        )
        assert await reason(ActionKind.READ, EntityKind.KIT, actor) is None

    async def test_decision_carries_context(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)

        decision = await authz.evaluate(ActionKind.READ, EntityKind.KIT, make_actor(role.id))

        assert decision.allowed is True
        assert decision.role_id == role.id
        assert decision.permission == "kit:read"

    async def test_each_decision_is_logged(
        self, authz, make_actor, mock_logger
    ):
        await authz.allowed(ActionKind.CREATE, EntityKind.KIT, make_actor(None))

        mock_logger.info.assert_called_once_with(
            "authorization_check",
            permission="kit:create",
            role_id=None,
            allowed=False,
            reason="no_role",
        )


@pytest.mark.unit
class TestRequire:
    """Test require() error mapping."""

    async def test_success(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy_repo.grant(role, EntityKind.BASE, create=True)

        result = await authz.require(ActionKind.CREATE, EntityKind.BASE, make_actor(role.id))

        assert result == Success(value=None)

    @pytest.mark.parametrize(
        ("role_id", "entity", "action", "code"),
        [
            ("<none>", EntityKind.KIT, ActionKind.READ, ErrorCode.USER_NOT_AUTHENTICATED),
            (None, EntityKind.KIT, ActionKind.READ, ErrorCode.ROLE_NOT_FOUND),
            ("ghost", EntityKind.KIT, ActionKind.READ, ErrorCode.ROLE_NOT_FOUND),
            ("<role>", EntityKind.USER, ActionKind.READ, ErrorCode.POLICY_NOT_FOUND),
            ("<role>", EntityKind.KIT, ActionKind.DELETE, ErrorCode.PERMISSION_DENIED),
        ],
    )
    async def test_error_codes(
        self, authz, make_actor, role_repo, policy_repo, role_id, entity, action, code
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        if role_id == "<none>":
            actor = None
        elif role_id == "<role>":
            actor = make_actor(role.id)
        else:
            actor = make_actor(role_id)

        result = await authz.require(action, entity, actor)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)
        assert result.error.code == code
        assert result.error.required_permission == f"{entity.value}:{action.value}"


# =============================================================================
# Business rules
# =============================================================================


@pytest.mark.unit
class TestBusinessRules:
    """Helpers derive from policy data only."""

    async def test_can_manage_users_requires_create_and_delete(
        self, authz, make_actor, role_repo, policy_repo
    ):
        create_only = role_repo.add(RoleKind.LOGISTICS, role_id="create-only")
        delete_only = role_repo.add(RoleKind.LOGISTICS, role_id="delete-only")
        both = role_repo.add(RoleKind.PROGRAMMER, role_id="both")
        policy_repo.grant(create_only, EntityKind.USER, create=True)
        policy_repo.grant(delete_only, EntityKind.USER, delete=True)
        policy_repo.grant(both, EntityKind.USER, create=True, delete=True)

        assert await authz.can_manage_users(make_actor("create-only")) is False
        assert await authz.can_manage_users(make_actor("delete-only")) is False
        assert await authz.can_manage_users(make_actor("both")) is True

    async def test_thresholds_and_stock_follow_kit_item_update(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT_ITEM, update=True)
        actor = make_actor(role.id)

        assert await authz.can_edit_thresholds(actor) is True
        assert await authz.can_update_stock(actor) is True

    async def test_create_helpers(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy_repo.grant(role, EntityKind.VEHICLE, create=True)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)

        assert await authz.can_create_vehicles(actor) is True
        assert await authz.can_create_kits(actor) is False

    async def test_user_management(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy_repo.grant(role, EntityKind.USER, read=True, update=True)

        assert await authz.user_management(make_actor(role.id)) == PermissionSet(
            can_read=True, can_update=True
        )

    async def test_permission_matrix_covers_every_entity(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)

        matrix = await authz.permission_matrix(make_actor(role.id))

        assert set(matrix) == set(EntityKind)
        assert matrix[EntityKind.KIT] == PermissionSet(can_read=True)
        assert matrix[EntityKind.USER] == PermissionSet.none()

    async def test_role_kind_checks(self, authz, make_actor, role_repo):
        role = role_repo.add(RoleKind.LOGISTICS)
        actor = make_actor(role.id)

        assert await authz.is_logistics(actor) is True
        assert await authz.is_programmer(actor) is False
        assert await authz.is_sanitary(actor) is False
        assert await authz.is_programmer(None) is False

    async def test_role_kind_grants_nothing_by_itself(
        self, authz, make_actor, role_repo
    ):
        programmer = role_repo.add(RoleKind.PROGRAMMER)
        assert await authz.allowed(
            ActionKind.READ, EntityKind.KIT, make_actor(programmer.id)
        ) is False


# =============================================================================
# Role scenarios
# =============================================================================


@pytest.mark.unit
class TestRoleScenarios:
    """End-to-end checks over realistic policy sets."""

    async def test_programmer_with_full_policies(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.PROGRAMMER)
        for entity in EntityKind:
            policy_repo.grant(role, entity, True, True, True, True)
        actor = make_actor(role.id)

        for action, entity in ALL_PAIRS:
            assert await authz.allowed(action, entity, actor) is True
        assert await authz.can_manage_users(actor) is True

    async def test_logistics_full_kit_no_user_policy(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.LOGISTICS)
        policy_repo.grant(role, EntityKind.KIT, True, True, True, True)
        actor = make_actor(role.id)

        assert await authz.can_create_kits(actor) is True
        assert await authz.allowed(ActionKind.CREATE, EntityKind.USER, actor) is False
        assert await authz.can_manage_users(actor) is False

    async def test_sanitary_stock_control(self, authz, make_actor, role_repo, policy_repo):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT_ITEM, False, True, True, False)
        actor = make_actor(role.id)

        assert await authz.can_update_stock(actor) is True
        assert await authz.allowed(ActionKind.DELETE, EntityKind.KIT_ITEM, actor) is False
        assert await authz.can_create_kits(actor) is False


# =============================================================================
# Store failures
# =============================================================================


@pytest.mark.unit
class TestStoreFailures:
    """Outages deny and are retried on the next call."""

    async def test_policy_store_outage_denies_then_recovers(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)
        policy_repo.fail = True

        decision = await authz.evaluate(ActionKind.READ, EntityKind.KIT, actor)
        assert decision.allowed is False
        assert decision.reason is DenialReason.NO_POLICY

        policy_repo.fail = False
        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is True

    async def test_role_store_outage_denies_then_recovers(
        self, authz, make_actor, role_repo, policy_repo
    ):
        role = role_repo.add(RoleKind.SANITARY)
        policy_repo.grant(role, EntityKind.KIT, read=True)
        actor = make_actor(role.id)
        role_repo.fail = True

        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is False

        role_repo.fail = False
        assert await authz.allowed(ActionKind.READ, EntityKind.KIT, actor) is True
