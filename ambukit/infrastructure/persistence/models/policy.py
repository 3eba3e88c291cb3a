"""Policy database model.

One row per (role, entity) pair with four independent CRUD flags.

Indexes:
    - ix_policies_role_id: per-role policy list (the hot read path)
    - ix_policies_role_entity: duplicate check on the write path

Note:
    (role_id, entity) is NOT a unique constraint. PolicyService.create_policy
    refuses duplicates; reads take the first row in store order.
"""

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ambukit.infrastructure.persistence.base import BaseMutableModel


class PolicyModel(BaseMutableModel):
    """Policy table (policies)."""

    __tablename__ = "policies"

    role_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entity: Mapped[str] = mapped_column(String(32), nullable=False)
    can_create: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_update: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_delete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_policies_role_entity", "role_id", "entity"),)
