"""User ORM model. Root identity; never deleted, only disabled."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import UserStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdTimestampModel


class User(IdTimestampModel, Base):
    """User model. Table: app_user. Unique username and email."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserStatus.ACTIVE.value
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
