"""OrgUnit ORM model. Node of the organization tree (self-referencing parent_id)."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import OrgUnitStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdTimestampModel


class OrgUnit(IdTimestampModel, Base):
    """Org unit. Table: org_unit. parent_id null means a top-level unit."""

    __tablename__ = "org_unit"

    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("org_unit.id", ondelete="SET NULL"), nullable=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrgUnitStatus.ACTIVE.value
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_org_unit_parent", "parent_id"),
        Index("ix_org_unit_status", "status"),
    )
