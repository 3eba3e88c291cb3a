"""Pytest configuration and shared fixtures.

Provides:
1. Marker registration (unit, integration)
2. Automatic asyncio marker for async tests
3. In-memory fake repositories with call counting and failure injection
4. Wired PolicyService / AuthorizationService fixtures over the fakes
5. A SQLite (aiosqlite) Database fixture for integration tests
"""

import asyncio
from collections import Counter
from dataclasses import replace
from itertools import count
from unittest.mock import Mock

import pytest
import pytest_asyncio

from ambukit.application.services import AuthorizationService, PolicyService
from ambukit.domain.entities import Actor, Policy, Role
from ambukit.domain.enums import EntityKind, RoleKind
from ambukit.infrastructure.cache import InMemoryPolicyCache
from ambukit.infrastructure.persistence.database import Database


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database or redis"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# In-memory fake repositories
# =============================================================================


class StoreUnavailable(ConnectionError):
    """Raised by the fakes while `fail` is set."""


class FakeRoleRepository:
    """RoleRepository backed by a list (list order is store order)."""

    def __init__(self) -> None:
        self.roles: list[Role] = []
        self.calls: Counter[str] = Counter()
        self.fail = False
        self._ids = count(1)

    def _hit(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail:
            raise StoreUnavailable("role store unavailable")

    def add(
        self,
        kind: RoleKind,
        display_name: str | None = None,
        role_id: str | None = None,
    ) -> Role:
        """Insert directly (test setup, not counted)."""
        role = Role(
            id=role_id or f"role-{next(self._ids)}",
            kind=kind,
            display_name=display_name or kind.value.title(),
        )
        self.roles.append(role)
        return role

    async def find_all(self) -> list[Role]:
        self._hit("find_all")
        return list(self.roles)

    async def find_by_id(self, role_id: str) -> Role | None:
        self._hit("find_by_id")
        return next((r for r in self.roles if r.id == role_id), None)

    async def find_by_kind(self, kind: RoleKind) -> list[Role]:
        self._hit("find_by_kind")
        return [r for r in self.roles if r.kind == kind]

    async def save(self, role: Role) -> Role:
        self._hit("save")
        stored = replace(role, id=role.id or f"role-{next(self._ids)}")
        self.roles.append(stored)
        return stored


class FakePolicyRepository:
    """PolicyRepository backed by a list (list order is store order)."""

    def __init__(self) -> None:
        self.policies: list[Policy] = []
        self.calls: Counter[str] = Counter()
        self.fail = False
        self._ids = count(1)

    def _hit(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail:
            raise StoreUnavailable("policy store unavailable")

    def grant(
        self,
        role: Role,
        entity: EntityKind,
        create: bool = False,
        read: bool = False,
        update: bool = False,
        delete: bool = False,
    ) -> Policy:
        """Insert directly (test setup, not counted)."""
        assert role.id is not None
        policy = Policy(
            id=f"policy-{next(self._ids)}",
            role_id=role.id,
            entity=entity,
            can_create=create,
            can_read=read,
            can_update=update,
            can_delete=delete,
        )
        self.policies.append(policy)
        return policy

    async def find_by_role(self, role_id: str) -> list[Policy]:
        self._hit("find_by_role")
        return [p for p in self.policies if p.role_id == role_id]

    async def find_by_id(self, policy_id: str) -> Policy | None:
        self._hit("find_by_id")
        return next((p for p in self.policies if p.id == policy_id), None)

    async def find_by_role_and_entity(
        self, role_id: str, entity: EntityKind
    ) -> list[Policy]:
        self._hit("find_by_role_and_entity")
        return [
            p for p in self.policies if p.role_id == role_id and p.entity == entity
        ]

    async def save(self, policy: Policy) -> Policy:
        self._hit("save")
        stored = replace(policy, id=policy.id or f"policy-{next(self._ids)}")
        self.policies.append(stored)
        return stored

    async def update(self, policy: Policy) -> Policy:
        self._hit("update")
        for index, existing in enumerate(self.policies):
            if existing.id == policy.id:
                self.policies[index] = policy
                return policy
        raise LookupError(f"Policy {policy.id} not found")


# =============================================================================
# Reusable fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def role_repo() -> FakeRoleRepository:
    return FakeRoleRepository()


@pytest.fixture
def policy_repo() -> FakePolicyRepository:
    return FakePolicyRepository()


@pytest.fixture
def policy_cache() -> InMemoryPolicyCache:
    return InMemoryPolicyCache()


@pytest.fixture
def policy_service(role_repo, policy_repo, policy_cache, mock_logger) -> PolicyService:
    """PolicyService over the fakes with a fresh in-memory cache."""
    return PolicyService(
        role_repository=role_repo,
        policy_repository=policy_repo,
        cache=policy_cache,
        logger=mock_logger,
    )


@pytest.fixture
def authz(policy_service, mock_logger) -> AuthorizationService:
    """AuthorizationService over policy_service."""
    return AuthorizationService(policy_service=policy_service, logger=mock_logger)


@pytest.fixture
def make_actor():
    """Factory for Actor values.

    Usage:
        actor = make_actor(role.id)
    """

    def factory(role_id: str | None, username: str = "tester") -> Actor:
        return Actor(id=f"user-{username}", username=username, role_id=role_id)

    return factory


# =============================================================================
# Integration fixtures
# =============================================================================


@pytest_asyncio.fixture
async def sqlite_database():
    """Fresh in-memory SQLite database with all tables created.

    Usage:
        async def test_something(sqlite_database):
            repo = RoleRepository(sqlite_database)
    """
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.close()
