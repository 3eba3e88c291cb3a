"""PolicyRepository - SQLAlchemy implementation of PolicyRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Policy entities and database PolicyModel.
"""

from sqlalchemy import select

from ambukit.domain.entities import Policy
from ambukit.domain.enums import EntityKind
from ambukit.infrastructure.persistence.database import Database
from ambukit.infrastructure.persistence.models import PolicyModel


class PolicyRepository:
    """SQLAlchemy implementation of PolicyRepository protocol.

    This class does NOT inherit from PolicyRepository protocol (Protocol
    uses structural typing). Each call opens its own session.

    Example:
        >>> repo = PolicyRepository(database)
        >>> policies = await repo.find_by_role(role.id)
    """

    def __init__(self, database: Database) -> None:
        """Initialize repository with the database handle.

        Args:
            database: Database providing sessions.
        """
        self.database = database

    async def find_by_role(self, role_id: str) -> list[Policy]:
        """Return every policy of a role, oldest first."""
        stmt = (
            select(PolicyModel)
            .where(PolicyModel.role_id == role_id)
            .order_by(PolicyModel.created_at, PolicyModel.id)
        )
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            return [self._to_domain(model) for model in result.scalars().all()]

    async def find_by_id(self, policy_id: str) -> Policy | None:
        """Find policy by ID.

        Returns:
            Domain Policy entity if found, None otherwise.
        """
        stmt = select(PolicyModel).where(PolicyModel.id == policy_id)
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_role_and_entity(
        self, role_id: str, entity: EntityKind
    ) -> list[Policy]:
        """Return the policies for (role_id, entity), oldest first."""
        stmt = (
            select(PolicyModel)
            .where(PolicyModel.role_id == role_id, PolicyModel.entity == entity.value)
            .order_by(PolicyModel.created_at, PolicyModel.id)
        )
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            return [self._to_domain(model) for model in result.scalars().all()]

    async def save(self, policy: Policy) -> Policy:
        """Create new policy in database.

        Returns:
            Policy: The stored policy with id and timestamps.

        Raises:
            IntegrityError: If role_id references no role (where FKs are enforced).
        """
        model = self._to_model(policy)
        async with self.database.get_session() as session:
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_domain(model)

    async def update(self, policy: Policy) -> Policy:
        """Overwrite the four flags of an existing policy.

        Raises:
            LookupError: If no policy with policy.id exists.
        """
        stmt = select(PolicyModel).where(PolicyModel.id == policy.id)
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            if model is None:
                raise LookupError(f"Policy {policy.id} not found")

            model.can_create = policy.can_create
            model.can_read = policy.can_read
            model.can_update = policy.can_update
            model.can_delete = policy.can_delete

            await session.flush()
            await session.refresh(model)
            return self._to_domain(model)

    def _to_domain(self, model: PolicyModel) -> Policy:
        """Convert database model to domain entity."""
        return Policy(
            id=model.id,
            role_id=model.role_id,
            entity=EntityKind(model.entity),
            can_create=model.can_create,
            can_read=model.can_read,
            can_update=model.can_update,
            can_delete=model.can_delete,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, policy: Policy) -> PolicyModel:
        """Convert domain entity to database model."""
        model = PolicyModel(
            role_id=policy.role_id,
            entity=policy.entity.value,
            can_create=policy.can_create,
            can_read=policy.can_read,
            can_update=policy.can_update,
            can_delete=policy.can_delete,
        )
        if policy.id is not None:
            model.id = policy.id
        return model
