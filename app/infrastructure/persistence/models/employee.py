"""Employee and JobPosition ORM models (HR attributes linked to a user)."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import EmployeeStatus, EmploymentType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdTimestampModel, IntIdMixin


class JobPosition(IntIdMixin, Base):
    """Job position. Table: job_position. Unique code."""

    __tablename__ = "job_position"

    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)


class Employee(IdTimestampModel, Base):
    """Employee. Table: employee. At most one employee per user."""

    __tablename__ = "employee"

    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    employee_no: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    employment_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmploymentType.FULL_TIME.value
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmployeeStatus.ACTIVE.value
    )
    hired_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    terminated_at: Mapped[date | None] = mapped_column(Date, nullable=True)
