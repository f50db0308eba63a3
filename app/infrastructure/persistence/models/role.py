"""Role ORM model. Named bundle of permissions (ADMIN, HEAD_FACULTY, LECTURER, ...)."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdTimestampModel


class Role(IdTimestampModel, Base):
    """Role. Table: role. Unique code. Inactive roles grant nothing."""

    __tablename__ = "role"

    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
