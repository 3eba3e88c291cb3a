"""RoleRepository - SQLAlchemy implementation of RoleRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Role entities and database RoleModel.
"""

from sqlalchemy import select

from ambukit.domain.entities import Role
from ambukit.domain.enums import RoleKind
from ambukit.infrastructure.persistence.database import Database
from ambukit.infrastructure.persistence.models import RoleModel


class RoleRepository:
    """SQLAlchemy implementation of RoleRepository protocol.

    This class does NOT inherit from RoleRepository protocol (Protocol uses
    structural typing). Each call opens its own session on the Database.

    Store order is (created_at, id); UUIDv7 IDs break timestamp ties in
    insertion order.

    Raises:
        SQLAlchemyError: On transport failure (propagated to the service).
        ValueError: If a stored kind is not a RoleKind value.

    Example:
        >>> repo = RoleRepository(database)
        >>> roles = await repo.find_by_kind(RoleKind.SANITARY)
    """

    def __init__(self, database: Database) -> None:
        """Initialize repository with the database handle.

        Args:
            database: Database providing sessions.
        """
        self.database = database

    async def find_all(self) -> list[Role]:
        """Return every role, oldest first."""
        stmt = select(RoleModel).order_by(RoleModel.created_at, RoleModel.id)
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            return [self._to_domain(model) for model in result.scalars().all()]

    async def find_by_id(self, role_id: str) -> Role | None:
        """Find role by ID.

        Args:
            role_id: Role identifier.

        Returns:
            Domain Role entity if found, None otherwise.
        """
        stmt = select(RoleModel).where(RoleModel.id == role_id)
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_kind(self, kind: RoleKind) -> list[Role]:
        """Return all roles of a kind, oldest first."""
        stmt = (
            select(RoleModel)
            .where(RoleModel.kind == kind.value)
            .order_by(RoleModel.created_at, RoleModel.id)
        )
        async with self.database.get_session() as session:
            result = await session.execute(stmt)
            return [self._to_domain(model) for model in result.scalars().all()]

    async def save(self, role: Role) -> Role:
        """Create new role in database.

        Args:
            role: Domain Role entity (id ignored unless set).

        Returns:
            Role: The stored role with id and timestamps.
        """
        model = self._to_model(role)
        async with self.database.get_session() as session:
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_domain(model)

    def _to_domain(self, model: RoleModel) -> Role:
        """Convert database model to domain entity."""
        return Role(
            id=model.id,
            kind=RoleKind(model.kind),
            display_name=model.display_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, role: Role) -> RoleModel:
        """Convert domain entity to database model."""
        model = RoleModel(kind=role.kind.value, display_name=role.display_name)
        if role.id is not None:
            model.id = role.id
        return model
