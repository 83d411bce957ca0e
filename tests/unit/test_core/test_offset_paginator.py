"""Unit tests for the offset paginator."""
from __future__ import annotations

import asyncio

import pytest

from book_service.core.pagination import (
    Comparison,
    OffsetPaginator,
    PageRequest,
    PaginatorDefaults,
    QueryArgs,
)
from book_service.core.settings import PaginationSettings
from tests.utils import InMemoryRowSource, make_rows


@pytest.mark.unit
class TestOffsetPaginatorOptions:
    """Option resolution and clamping."""

    async def test_hard_defaults(self):
        """No options: page 1, limit 10, newest first."""
        source = InMemoryRowSource(make_rows(25))

        page = await OffsetPaginator().paginate(source)

        meta = page.meta.pagination
        assert (meta.page, meta.limit, meta.total, meta.total_pages) == (1, 10, 25, 3)
        assert [row["id"] for row in page.data] == [f"r{i:02d}" for i in range(24, 14, -1)]
        assert source.fetch_calls[0].order_by == (("created_at", "desc"),)

    async def test_configured_defaults(self):
        defaults = PaginatorDefaults(limit=4, sort_field="title", sort_order="asc")
        source = InMemoryRowSource(make_rows(6))

        page = await OffsetPaginator(defaults).paginate(source)

        assert page.meta.pagination.limit == 4
        assert source.fetch_calls[0].order_by == (("title", "asc"),)

    def test_defaults_from_settings(self):
        settings = PaginationSettings(
            default_limit=25, default_sort_field="title", default_sort_order="asc"
        )

        defaults = PaginatorDefaults.from_settings(settings)

        assert defaults == PaginatorDefaults(page=1, limit=25, sort_field="title", sort_order="asc")

    @pytest.mark.parametrize(
        ("page", "limit", "expected"),
        [(0, 10, (1, 10)), (-3, 10, (1, 10)), (2, 0, (2, 1)), (1, -5, (1, 1))],
    )
    async def test_page_and_limit_clamped_to_one(self, page, limit, expected):
        source = InMemoryRowSource(make_rows(3))

        result = await OffsetPaginator().paginate(source, options=PageRequest(page=page, limit=limit))

        meta = result.meta.pagination
        assert (meta.page, meta.limit) == expected

    @pytest.mark.parametrize(
        ("page", "limit", "skip"),
        [(1, 10, 0), (2, 10, 10), (3, 7, 14), (5, 1, 4)],
    )
    async def test_skip_arithmetic(self, page, limit, skip):
        source = InMemoryRowSource(make_rows(50))

        await OffsetPaginator().paginate(source, options=PageRequest(page=page, limit=limit))

        fetched = source.fetch_calls[0]
        assert fetched.skip == skip
        assert fetched.take == limit


@pytest.mark.unit
class TestOffsetPaginatorQuery:
    """How caller arguments reach the source."""

    async def test_explicit_order_by_wins(self):
        args = QueryArgs(order_by=(("title", "asc"), ("id", "asc")))
        source = InMemoryRowSource(make_rows(3))

        await OffsetPaginator().paginate(
            source, args, PageRequest(sort_field="created_at", sort_order="desc")
        )

        assert source.fetch_calls[0].order_by == (("title", "asc"), ("id", "asc"))

    async def test_count_receives_only_the_filter(self):
        where = Comparison("created_at", "gt", 4)
        args = QueryArgs(where=where, select=("id",), include=("genre",), extra={"k": 1})
        source = InMemoryRowSource(make_rows(10))

        page = await OffsetPaginator().paginate(source, args, PageRequest(limit=3))

        assert source.count_calls == [QueryArgs(where=where)]
        fetched = source.fetch_calls[0]
        assert fetched.where is where
        assert fetched.select == ("id",)
        assert fetched.include == ("genre",)
        assert fetched.extra == {"k": 1}
        assert page.meta.pagination.total == 5

    async def test_rows_returned_unchanged(self):
        rows = make_rows(3)
        source = InMemoryRowSource(rows)

        page = await OffsetPaginator().paginate(
            source, options=PageRequest(sort_field="created_at", sort_order="asc")
        )

        assert [id(row) for row in page.data] == [id(row) for row in rows]


@pytest.mark.unit
class TestOffsetPaginatorTotals:
    """total and total_pages."""

    @pytest.mark.parametrize(
        ("total", "limit", "total_pages"),
        [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5), (26, 5, 6)],
    )
    async def test_total_pages(self, total, limit, total_pages):
        source = InMemoryRowSource(make_rows(total))

        page = await OffsetPaginator().paginate(source, options=PageRequest(limit=limit))

        assert page.meta.pagination.total == total
        assert page.meta.pagination.total_pages == total_pages

    async def test_page_past_the_end_is_empty(self):
        source = InMemoryRowSource(make_rows(5))

        page = await OffsetPaginator().paginate(source, options=PageRequest(page=4, limit=2))

        assert page.data == []
        assert page.meta.pagination.total == 5
        assert page.meta.pagination.total_pages == 3

    def test_meta_serialises_camel_case(self):
        from book_service.core.pagination import OffsetPagination

        dumped = OffsetPagination(page=1, limit=10, total=0, total_pages=1).model_dump()

        assert dumped == {
            "page": 1,
            "limit": 10,
            "total": 0,
            "totalPages": 1,
            "previousPage": None,
            "nextPage": None,
        }

    @pytest.mark.parametrize(
        ("page", "previous_page", "next_page"),
        [(1, None, 2), (2, 1, 3), (3, 2, None), (5, 4, None)],
    )
    async def test_neighbouring_pages(self, page, previous_page, next_page):
        source = InMemoryRowSource(make_rows(5))

        result = await OffsetPaginator().paginate(source, options=PageRequest(page=page, limit=2))

        meta = result.meta.pagination
        assert meta.total_pages == 3
        assert (meta.previous_page, meta.next_page) == (previous_page, next_page)

    async def test_single_page_has_no_neighbours(self):
        page = await OffsetPaginator().paginate(InMemoryRowSource([]))

        assert page.meta.pagination.previous_page is None
        assert page.meta.pagination.next_page is None


@pytest.mark.unit
class TestOffsetPaginatorConcurrency:
    """Fetch and count run concurrently."""

    async def test_fetch_and_count_start_together(self):
        source = InMemoryRowSource(make_rows(5), delay=0.05)

        await OffsetPaginator().paginate(source)

        started = dict(source.started)
        assert set(started) == {"fetch_page", "count"}
        assert abs(started["fetch_page"] - started["count"]) < 0.005

    async def test_source_errors_propagate(self):
        boom = RuntimeError("database unavailable")
        source = InMemoryRowSource(make_rows(5), error=boom)

        with pytest.raises(RuntimeError) as exc_info:
            await OffsetPaginator().paginate(source)

        assert exc_info.value is boom

    async def test_failed_fetch_cancels_count(self):
        boom = RuntimeError("database unavailable")
        count_cancelled = asyncio.Event()

        class _FailingFetch(InMemoryRowSource):
            async def fetch_page(self, args):
                await asyncio.sleep(0)
                raise boom

            async def count(self, args):
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    count_cancelled.set()
                    raise
                return 0

        with pytest.raises(RuntimeError) as exc_info:
            await OffsetPaginator().paginate(_FailingFetch(make_rows(5)))

        assert exc_info.value is boom
        await asyncio.wait_for(count_cancelled.wait(), timeout=1)
