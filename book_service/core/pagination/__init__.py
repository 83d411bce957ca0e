"""Offset and cursor pagination over pluggable row sources.

Offset style:
    paginator = OffsetPaginator(PaginatorDefaults.from_settings(get_pagination_settings()))
    page = await paginator.paginate(source, QueryArgs(where=...), PageRequest(page=2))

Cursor style:
    paginator = CursorPaginator()
    page = await paginator.paginate(source, QueryArgs(where=...), CursorRequest(cursor=token))

Both paginators are stateless apart from their defaults and can be shared
across concurrent requests.
"""

from book_service.core.pagination.cursor import CursorCodec, CursorData
from book_service.core.pagination.keyset import CursorPaginator, seek_predicate
from book_service.core.pagination.offset import OffsetPaginator, PaginatorDefaults
from book_service.core.pagination.query import And, Comparison, Or, QueryArgs, SortOrder
from book_service.core.pagination.schemas import (
    CursorMeta,
    CursorPage,
    CursorPagination,
    CursorRequest,
    OffsetMeta,
    OffsetPage,
    OffsetPagination,
    PageRequest,
)
from book_service.core.pagination.source import (
    CountingRowSource,
    RowSource,
    SQLAlchemyRowSource,
)

__all__ = [
    # Filter nodes
    "And",
    "Comparison",
    "Or",
    "QueryArgs",
    "SortOrder",
    # Cursor utilities
    "CursorCodec",
    "CursorData",
    "seek_predicate",
    # Paginators
    "CursorPaginator",
    "OffsetPaginator",
    "PaginatorDefaults",
    # Requests and results
    "CursorMeta",
    "CursorPage",
    "CursorPagination",
    "CursorRequest",
    "OffsetMeta",
    "OffsetPage",
    "OffsetPagination",
    "PageRequest",
    # Row sources
    "CountingRowSource",
    "RowSource",
    "SQLAlchemyRowSource",
]
