"""Repository for the books feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from book_service.core.database.repository import BaseRepository
from book_service.features.books.models import Book

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class BookRepository(BaseRepository[Book]):
    """Repository for Book model.

    Listing goes through ``SQLAlchemyRowSource`` and the paginators, so only
    lookups that the CRUD endpoints and the seed command need live here.
    """

    def __init__(self) -> None:
        super().__init__(Book)

    async def find_duplicate(
        self,
        session: AsyncSession,
        *,
        title: str,
        author: str,
        published: int,
        genre_id: str,
    ) -> Book | None:
        """Find a book with the same title, author, year and genre."""
        stmt = select(Book).where(
            Book.title == title,
            Book.author == author,
            Book.published == published,
            Book.genre_id == genre_id,
        )
        result = await session.execute(stmt)
        book = result.scalars().first()

        self._lazy.debug(lambda: f"db.find_duplicate({title!r}, {author!r}) -> {book is not None}")
        return book


_book_repository: BookRepository | None = None


def get_book_repository() -> BookRepository:
    """Get BookRepository instance."""
    global _book_repository
    if _book_repository is None:
        _book_repository = BookRepository()
    return _book_repository
