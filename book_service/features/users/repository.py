"""Repository for the users feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from book_service.core.database.repository import BaseRepository
from book_service.features.users.models import User

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, session: AsyncSession, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        return await self.get_by(session, User.email, email.strip().lower())


_user_repository: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get UserRepository instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
