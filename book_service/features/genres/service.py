"""Service layer for the genres feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from book_service.features.genres.repository import GenreRepository, get_genre_repository
from book_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from book_service.features.genres.models import Genre

lazy_logger = get_lazy_logger(__name__)


class GenreService:
    """Read access to the genre catalogue."""

    def __init__(
        self,
        session: AsyncSession,
        repo: GenreRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_genre_repository()

    async def list_genres(self) -> Sequence[Genre]:
        """Return all genres ordered by name."""
        genres = await self._repo.list_by_name(self._session)
        lazy_logger.debug(lambda: f"service.list_genres() -> {len(genres)} genres")
        return genres
