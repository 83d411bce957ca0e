"""Offset (page number) pagination."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from book_service.core.pagination.query import QueryArgs, SortOrder
from book_service.core.pagination.schemas import (
    OffsetMeta,
    OffsetPage,
    OffsetPagination,
    PageRequest,
)
from book_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from book_service.core.pagination.source import CountingRowSource
    from book_service.core.settings.pagination import PaginationSettings

_lazy = get_lazy_logger(__name__)


@dataclass(slots=True, frozen=True)
class PaginatorDefaults:
    """Fallbacks for options a request leaves unset."""

    page: int = 1
    limit: int = 10
    sort_field: str = "created_at"
    sort_order: SortOrder = "desc"

    @classmethod
    def from_settings(cls, settings: PaginationSettings) -> PaginatorDefaults:
        return cls(
            limit=settings.default_limit,
            sort_field=settings.default_sort_field,
            sort_order=settings.default_sort_order,
        )


class OffsetPaginator:
    """Paginate a row source by page number.

    Fetch and count are issued concurrently, so a page costs
    ``max(fetch, count)`` rather than their sum. If either fails the other
    is cancelled and the original error propagates.

    Example:
        paginator = OffsetPaginator()
        page = await paginator.paginate(
            source,
            QueryArgs(where=Book.author == "Le Guin"),
            PageRequest(page=2, limit=20),
        )
    """

    __slots__ = ("defaults",)

    def __init__(self, defaults: PaginatorDefaults | None = None) -> None:
        self.defaults = defaults or PaginatorDefaults()

    async def paginate[T](
        self,
        source: CountingRowSource,
        args: QueryArgs | None = None,
        options: PageRequest | None = None,
    ) -> OffsetPage[T]:
        """Return one page of rows and the totals for the whole filter.

        Args:
            source: Row source providing ``fetch_page`` and ``count``
            args: Caller query arguments; an explicit ``order_by`` wins over
                ``sort_field``/``sort_order``
            options: Page, limit and sort options; unset fields use defaults

        Returns:
            Rows as returned by the source plus page/limit/total/total_pages
            and the neighbouring page numbers

        Raises:
            Whatever the source raises, unchanged.
        """
        args = args or QueryArgs()
        options = options or PageRequest()

        page = max(1, coalesce(options.page, self.defaults.page))
        limit = max(1, coalesce(options.limit, self.defaults.limit))
        sort_field = coalesce(options.sort_field, self.defaults.sort_field)
        sort_order = coalesce(options.sort_order, self.defaults.sort_order)

        skip = (page - 1) * limit
        order_by = args.order_by or ((sort_field, sort_order),)

        fetch = asyncio.ensure_future(
            source.fetch_page(args.merge(skip=skip, take=limit, order_by=order_by))
        )
        count = asyncio.ensure_future(source.count(args.filter_only()))
        try:
            rows, total = await asyncio.gather(fetch, count)
        except BaseException:
            # No query may outlive a failed page
            fetch.cancel()
            count.cancel()
            raise

        total_pages = max(1, math.ceil(total / limit))
        _lazy.debug(
            lambda: f"paginate.offset: page {page}/{total_pages} (limit={limit}) -> {len(rows)}/{total} rows"
        )
        return OffsetPage(
            data=rows,
            meta=OffsetMeta(
                pagination=OffsetPagination(
                    page=page,
                    limit=limit,
                    total=total,
                    total_pages=total_pages,
                    previous_page=page - 1 if page > 1 else None,
                    next_page=page + 1 if page < total_pages else None,
                )
            ),
        )


def coalesce(value: Any, default: Any) -> Any:
    return default if value is None else value


__all__ = ["OffsetPaginator", "PaginatorDefaults", "coalesce"]
