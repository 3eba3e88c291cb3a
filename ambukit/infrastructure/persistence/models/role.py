"""Role database model.

Fields:
    id, created_at, updated_at: from BaseMutableModel
    kind: Role kind value (programmer, logistics, sanitary)
    display_name: Human-readable name

Note:
    kind is indexed but NOT unique. Uniqueness is enforced by
    PolicyService.create_role; reads resolve duplicates oldest first.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ambukit.infrastructure.persistence.base import BaseMutableModel


class RoleModel(BaseMutableModel):
    """Role table (roles)."""

    __tablename__ = "roles"

    kind: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
