"""OrgAssignment ORM model: employee placed in an org unit over a validity window."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import AssignmentType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdTimestampModel


class OrgAssignment(IdTimestampModel, Base):
    """Org assignment. Table: org_assignment. end_date null means open-ended."""

    __tablename__ = "org_assignment"

    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False
    )
    org_unit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("org_unit.id", ondelete="CASCADE"), nullable=False
    )
    position_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("job_position.id", ondelete="SET NULL"), nullable=True
    )
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assignment_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AssignmentType.ACADEMIC.value
    )
    allocation: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("1.00")
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("ix_org_assignment_employee", "employee_id"),
        Index("ix_org_assignment_unit", "org_unit_id"),
    )
