"""Integration tests for SQLAlchemyRowSource and the paginators on SQLite."""
from __future__ import annotations

import pytest

from book_service.core.database import InvalidFilterError
from book_service.core.pagination import (
    And,
    Comparison,
    CursorPaginator,
    CursorRequest,
    OffsetPaginator,
    Or,
    PageRequest,
    QueryArgs,
    SQLAlchemyRowSource,
)
from book_service.features.books.models import Book
from book_service.features.books.seed import SAMPLE_BOOKS
from book_service.features.books.service import build_book_filter

pytestmark = pytest.mark.integration


@pytest.fixture
def source(session_factory) -> SQLAlchemyRowSource[Book]:
    return SQLAlchemyRowSource(Book, session_factory)


class TestCompileWhere:
    """Filter nodes compile to SQL expressions."""

    def test_none_is_no_filter(self, source):
        assert source.compile_where(None) is None

    def test_comparison(self, source):
        compiled = source.compile_where(Comparison("published", "lt", 1950))

        assert str(compiled.compile(compile_kwargs={"literal_binds": True})) == (
            "books.published < 1950"
        )

    def test_nested_nodes(self, source):
        clause = Or(
            Comparison("published", "gt", 2000),
            And(Comparison("published", "eq", 2000), Comparison("id", "gt", "abc")),
        )

        sql = str(source.compile_where(clause).compile(compile_kwargs={"literal_binds": True}))

        assert sql == (
            "books.published > 2000 OR books.published = 2000 AND books.id > 'abc'"
        )

    def test_native_expression_passes_through(self, source):
        native = Book.title == "Dune"

        assert source.compile_where(native) is native

    def test_unknown_column_rejected(self, source):
        with pytest.raises(InvalidFilterError) as exc_info:
            source.compile_where(Comparison("colour", "eq", "red"))

        assert exc_info.value.filter_name == "colour"

    def test_unknown_sort_column_rejected(self, source):
        with pytest.raises(InvalidFilterError):
            source.build_select(QueryArgs(order_by=(("colour", "asc"),)))

    def test_unknown_relationship_rejected(self, source):
        with pytest.raises(InvalidFilterError):
            source.build_select(QueryArgs(include=("publisher",)))

    def test_extra_becomes_execution_options(self, source):
        stmt = source.build_select(QueryArgs(extra={"populate_existing": True}))

        assert stmt.get_execution_options()["populate_existing"] is True

    def test_no_extra_no_execution_options(self, source):
        assert "populate_existing" not in source.build_select(QueryArgs()).get_execution_options()


class TestFetchAndCount:
    """Queries against the seeded catalogue."""

    async def test_count_all_and_filtered(self, source, catalogue):
        assert await source.count(QueryArgs()) == len(SAMPLE_BOOKS)
        assert await source.count(QueryArgs(where=Comparison("published", "eq", 2012))) == 3

    async def test_fetch_orders_skips_and_takes(self, source, catalogue):
        rows = await source.fetch_page(
            QueryArgs(order_by=(("published", "asc"), ("title", "asc")), skip=1, take=3)
        )

        assert [(b.title, b.published) for b in rows] == [
            ("The Hobbit", 1937),
            ("Foundation", 1951),
            ("Dune", 1965),
        ]

    async def test_select_and_include(self, source, catalogue):
        rows = await source.fetch_page(
            QueryArgs(
                where=Book.title == "Dune",
                select=("id", "title", "author", "published", "genre_id", "created_at"),
                include=("genre",),
            )
        )

        assert len(rows) == 1
        assert rows[0].genre.key_name == "science-fiction"

    async def test_native_filter_from_service(self, source, catalogue):
        rows = await source.fetch_page(
            QueryArgs(where=build_book_filter(q="GIRL", genre="mystery"), order_by=(("title", "asc"),))
        )

        assert [b.title for b in rows] == ["Gone Girl", "The Girl with the Dragon Tattoo"]

    async def test_fetch_with_execution_options(self, source, catalogue):
        rows = await source.fetch_page(
            QueryArgs(where=Book.title == "Dune", extra={"populate_existing": True})
        )

        assert [b.title for b in rows] == ["Dune"]


class TestPaginatorsOnSQLite:
    """The same paginators run through the SQLAlchemy source."""

    async def test_offset_pages(self, source, catalogue):
        paginator = OffsetPaginator()

        page = await paginator.paginate(
            source, QueryArgs(), PageRequest(page=2, limit=4, sort_field="title", sort_order="asc")
        )

        meta = page.meta.pagination
        assert (meta.page, meta.limit, meta.total, meta.total_pages) == (2, 4, 15, 4)
        titles = sorted(title for title, *_ in SAMPLE_BOOKS)
        assert [b.title for b in page.data] == titles[4:8]

    @pytest.mark.parametrize(
        ("sort_field", "sort_order"),
        [("created_at", "desc"), ("published", "asc"), ("published", "desc"), ("title", "asc")],
    )
    async def test_cursor_walk_is_complete(self, source, catalogue, sort_field, sort_order):
        """Every book appears exactly once, including ties on published."""
        paginator = CursorPaginator()
        seen: list[str] = []
        cursor = None

        while True:
            page = await paginator.paginate(
                source,
                QueryArgs(),
                CursorRequest(cursor=cursor, limit=4, sort_field=sort_field, sort_order=sort_order),
            )
            seen.extend(b.id for b in page.data)
            if not page.meta.pagination.has_next_page:
                break
            cursor = page.meta.pagination.next_cursor

        assert len(seen) == len(SAMPLE_BOOKS)
        assert len(set(seen)) == len(SAMPLE_BOOKS)

    async def test_cursor_respects_filter(self, source, catalogue):
        paginator = CursorPaginator()
        args = QueryArgs(where=build_book_filter(genre="romance"))

        first = await paginator.paginate(
            source, args, CursorRequest(limit=2, sort_field="title", sort_order="asc")
        )
        second = await paginator.paginate(
            source,
            args,
            CursorRequest(
                cursor=first.meta.pagination.next_cursor,
                limit=2,
                sort_field="title",
                sort_order="asc",
            ),
        )

        assert [b.title for b in first.data] == ["Me Before You", "Pride and Prejudice"]
        assert [b.title for b in second.data] == ["The Fault in Our Stars"]
        assert second.meta.pagination.has_next_page is False
        assert second.meta.pagination.has_previous_page is True
