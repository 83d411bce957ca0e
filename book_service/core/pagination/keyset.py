"""Cursor (keyset) pagination.

Rows are ordered by ``(sort_field, id)`` in one direction. A cursor pins the
last row seen; the next page is every row strictly after it:

    ORDER BY created_at DESC, id DESC, cursor at (t1, id1):
    WHERE (created_at < t1) OR (created_at = t1 AND id < id1)

One extra row is fetched to learn whether another page exists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from book_service.core.pagination.cursor import CursorCodec
from book_service.core.pagination.offset import PaginatorDefaults, coalesce
from book_service.core.pagination.query import (
    And,
    Comparison,
    Or,
    QueryArgs,
    SortOrder,
    combine_where,
)
from book_service.core.pagination.schemas import (
    CursorMeta,
    CursorPage,
    CursorPagination,
    CursorRequest,
)
from book_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from book_service.core.pagination.cursor import CursorData
    from book_service.core.pagination.source import RowSource

_lazy = get_lazy_logger(__name__)


class CursorPaginator:
    """Paginate a row source with opaque cursors.

    ``has_previous_page`` is true whenever a cursor was supplied. It does not
    query backwards, so it can be true on a page that actually has nothing
    before it.

    Example:
        paginator = CursorPaginator()
        first = await paginator.paginate(source, options=CursorRequest(limit=20))
        second = await paginator.paginate(
            source,
            options=CursorRequest(limit=20, cursor=first.meta.pagination.next_cursor),
        )
    """

    __slots__ = ("defaults",)

    def __init__(self, defaults: PaginatorDefaults | None = None) -> None:
        self.defaults = defaults or PaginatorDefaults()

    async def paginate[T](
        self,
        source: RowSource,
        args: QueryArgs | None = None,
        options: CursorRequest | None = None,
    ) -> CursorPage[T]:
        """Return the page after ``options.cursor`` (or the first page).

        Args:
            source: Row source providing ``fetch_page``
            args: Caller query arguments; ``where`` is preserved and ANDed
                with the cursor predicate, ``order_by`` is always replaced
            options: Cursor, limit and sort options

        Returns:
            At most ``limit`` rows plus navigation metadata

        Raises:
            InvalidCursorFormatError: If the cursor cannot be decoded. No
                fetch is made in that case.
        """
        args = args or QueryArgs()
        options = options or CursorRequest()

        limit = max(1, coalesce(options.limit, self.defaults.limit))
        sort_field = coalesce(options.sort_field, self.defaults.sort_field)
        sort_order: SortOrder = coalesce(options.sort_order, self.defaults.sort_order)

        where = args.where
        if options.cursor:
            anchor = CursorCodec.decode(options.cursor)
            where = combine_where(where, seek_predicate(anchor, sort_field, sort_order))

        rows = list(
            await source.fetch_page(
                args.merge(
                    where=where,
                    take=limit + 1,
                    order_by=((sort_field, sort_order), ("id", sort_order)),
                )
            )
        )

        has_next_page = len(rows) > limit
        data = rows[:limit]
        has_previous_page = bool(options.cursor)

        next_cursor = CursorCodec.from_row(data[-1], sort_field) if has_next_page else None
        previous_cursor = (
            CursorCodec.from_row(data[0], sort_field) if has_previous_page and data else None
        )

        _lazy.debug(
            lambda: f"paginate.cursor: {sort_field} {sort_order} (limit={limit}) -> {len(data)} rows, next={has_next_page}"
        )
        return CursorPage(
            data=data,
            meta=CursorMeta(
                pagination=CursorPagination(
                    limit=limit,
                    has_next_page=has_next_page,
                    has_previous_page=has_previous_page,
                    next_cursor=next_cursor,
                    previous_cursor=previous_cursor,
                )
            ),
        )


def seek_predicate(anchor: CursorData, sort_field: str, sort_order: SortOrder) -> Or:
    """Build the filter selecting rows strictly after ``anchor``."""
    op = "lt" if sort_order == "desc" else "gt"
    return Or(
        Comparison(sort_field, op, anchor.sort_value),
        And(
            Comparison(sort_field, "eq", anchor.sort_value),
            Comparison("id", op, anchor.id),
        ),
    )


__all__ = ["CursorPaginator", "seek_predicate"]
