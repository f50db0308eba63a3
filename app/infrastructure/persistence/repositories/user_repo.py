"""User repository. Read methods return UserResult; entity getters return ORM."""

from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import verify_password


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        full_name=u.full_name,
        status=u.status,
    )


class UserRepository(BaseRepository[User]):
    """User lookups for authentication and the role endpoints."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_user(self, user_id: int) -> UserResult | None:
        orm = await self.get_by_id(user_id)
        return _user_to_result(orm) if orm else None

    async def get_by_username(self, username: str) -> UserResult | None:
        orm = await self.get_entity_by_username(username)
        return _user_to_result(orm) if orm else None

    async def get_entity_by_username(self, username: str) -> User | None:
        """Return ORM user (with hashed_password) for credential checks."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        """Return the active user whose password matches, else None."""
        orm = await self.get_entity_by_username(username)
        if orm is None or not orm.is_active:
            return None
        ok = await asyncio.to_thread(verify_password, password, orm.hashed_password)
        return _user_to_result(orm) if ok else None

    async def create_user(
        self,
        username: str,
        email: str,
        hashed_password: str,
        full_name: str | None = None,
    ) -> UserResult:
        user = User(
            username=username,
            email=email,
            hashed_password=hashed_password,
            full_name=full_name,
        )
        created = await self.create(user)
        return _user_to_result(created)
