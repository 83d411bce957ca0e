"""Repository for the genres feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from book_service.core.database.repository import BaseRepository
from book_service.features.genres.models import Genre

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class GenreRepository(BaseRepository[Genre]):
    """Repository for Genre model.

    Inherits get/get_or_raise/get_by/list/create/delete from BaseRepository.
    """

    def __init__(self) -> None:
        super().__init__(Genre)

    async def get_by_key_name(self, session: AsyncSession, key_name: str) -> Genre | None:
        """Get a genre by its slug."""
        return await self.get_by(session, Genre.key_name, key_name)

    async def list_by_name(self, session: AsyncSession) -> Sequence[Genre]:
        """List every genre, alphabetical by display name."""
        return await self.list(session, order_by=(Genre.name.asc(),))


_genre_repository: GenreRepository | None = None


def get_genre_repository() -> GenreRepository:
    """Get GenreRepository instance."""
    global _genre_repository
    if _genre_repository is None:
        _genre_repository = GenreRepository()
    return _genre_repository
