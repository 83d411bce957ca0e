"""Service layer for the books feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, or_, select

from book_service.core.pagination import (
    CursorRequest,
    PageRequest,
    QueryArgs,
    SQLAlchemyRowSource,
)
from book_service.features.books.models import Book
from book_service.features.books.repository import BookRepository, get_book_repository
from book_service.features.books.schemas import SUMMARY_COLUMNS
from book_service.features.genres.models import Genre
from book_service.infra.database import AsyncSessionLocal
from book_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.sql.elements import ColumnElement

    from book_service.core.pagination import (
        CursorPage,
        CursorPaginator,
        OffsetPage,
        OffsetPaginator,
        SortOrder,
    )
    from book_service.features.books.schemas import BookCreate, BookSortField, BookUpdate


# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)


def build_book_filter(*, q: str | None = None, genre: str | None = None) -> ColumnElement[bool] | None:
    """Build the listing filter.

    Args:
        q: Case-insensitive substring matched against title or author
        genre: Genre ``key_name`` the book must belong to

    Returns:
        A SQL predicate, or None when nothing filters
    """
    conditions: list[ColumnElement[bool]] = []
    if q:
        pattern = f"%{q}%"
        conditions.append(or_(Book.title.ilike(pattern), Book.author.ilike(pattern)))
    if genre:
        conditions.append(Book.genre_id.in_(select(Genre.id).where(Genre.key_name == genre)))
    if not conditions:
        return None
    return and_(*conditions)


class BookService:
    """Service for the book inventory.

    Handles business logic for:
    - Offset and cursor listings with search and genre filters
    - Book CRUD operations
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: BookRepository | None = None,
        *,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the book service.

        Args:
            session: Database session for CRUD operations
            repo: Book repository (optional, uses default if not provided)
            session_factory: Factory for listing queries, which open their
                own sessions (optional, uses the shared factory)
        """
        self._session = session
        self._repo = repo or get_book_repository()
        self._source = SQLAlchemyRowSource(Book, session_factory or AsyncSessionLocal)

    async def list_books(
        self,
        paginator: OffsetPaginator,
        *,
        page: int | None = None,
        per_page: int | None = None,
        q: str | None = None,
        genre: str | None = None,
        sort_field: BookSortField | None = None,
        sort_direction: SortOrder | None = None,
    ) -> OffsetPage[Book]:
        """List one page of books by page number.

        The ordering is always passed explicitly, so the requested sort wins
        over the paginator defaults.
        """
        sort_field = sort_field or "created_at"
        sort_direction = sort_direction or "desc"
        args = self._list_args(q=q, genre=genre).merge(order_by=((sort_field, sort_direction),))

        result: OffsetPage[Book] = await paginator.paginate(
            self._source, args, PageRequest(page=page, limit=per_page)
        )
        lazy_logger.debug(
            lambda: f"service.list_books(q={q!r}, genre={genre!r}, page={page}) "
            f"-> {len(result.data)}/{result.meta.pagination.total}"
        )
        return result

    async def list_books_cursor(
        self,
        paginator: CursorPaginator,
        *,
        cursor: str | None = None,
        limit: int | None = None,
        q: str | None = None,
        genre: str | None = None,
        sort_field: BookSortField | None = None,
        sort_direction: SortOrder | None = None,
    ) -> CursorPage[Book]:
        """List the books after ``cursor``.

        Raises:
            InvalidCursorFormatError: If the cursor cannot be decoded
        """
        result: CursorPage[Book] = await paginator.paginate(
            self._source,
            self._list_args(q=q, genre=genre),
            CursorRequest(
                cursor=cursor,
                limit=limit,
                sort_field=sort_field,
                sort_order=sort_direction,
            ),
        )
        lazy_logger.debug(
            lambda: f"service.list_books_cursor(q={q!r}, genre={genre!r}) -> {len(result.data)} "
            f"next={result.meta.pagination.has_next_page}"
        )
        return result

    async def get_book(self, book_id: str) -> Book:
        """Get a book by ID.

        Raises:
            NotFoundError: If book not found
        """
        return await self._repo.get_or_raise(self._session, book_id)

    async def create_book(self, payload: BookCreate) -> Book:
        """Add a book.

        Raises:
            IntegrityError: If ``genre_id`` does not name a genre
        """
        book = await self._repo.create(self._session, Book(**payload.model_dump()))
        await self._session.refresh(book, attribute_names=["genre"])

        logger.info(
            "Book created",
            extra={"book_id": book.id, "title": book.title, "genre_id": book.genre_id},
        )
        return book

    async def update_book(self, book_id: str, payload: BookUpdate) -> Book:
        """Apply the fields present in ``payload``.

        Raises:
            NotFoundError: If book not found
            IntegrityError: If a new ``genre_id`` does not name a genre
        """
        book = await self.get_book(book_id)
        changes: dict[str, Any] = payload.model_dump(exclude_none=True)
        for name, value in changes.items():
            setattr(book, name, value)

        await self._session.flush()
        await self._session.refresh(book)
        await self._session.refresh(book, attribute_names=["genre"])

        logger.info("Book updated", extra={"book_id": book.id, "fields": sorted(changes)})
        return book

    async def delete_book(self, book_id: str) -> Book:
        """Delete a book and return it as it was.

        Raises:
            NotFoundError: If book not found
        """
        book = await self.get_book(book_id)
        await self._repo.delete(self._session, book)
        return book

    @staticmethod
    def _list_args(*, q: str | None, genre: str | None) -> QueryArgs:
        return QueryArgs(
            where=build_book_filter(q=q, genre=genre),
            select=SUMMARY_COLUMNS,
            include=("genre",),
        )
