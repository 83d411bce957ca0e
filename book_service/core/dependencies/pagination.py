"""Pagination dependencies for FastAPI routes.

Paginators are built once from ``PaginationSettings`` and shared. Page size
query parameters pass through ``clamp_limit`` so a client can never ask for
more than ``max_limit`` rows.

Usage:
    from book_service.core.dependencies.pagination import OffsetPaginatorDep

    @router.get("/books")
    async def list_books(paginator: OffsetPaginatorDep, ...):
        page = await paginator.paginate(source, args, PageRequest(page=page, limit=limit))
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from book_service.core.pagination import CursorPaginator, OffsetPaginator, PaginatorDefaults
from book_service.core.settings import get_pagination_settings


@lru_cache(maxsize=1)
def get_offset_paginator() -> OffsetPaginator:
    """Get the shared offset paginator."""
    return OffsetPaginator(PaginatorDefaults.from_settings(get_pagination_settings()))


@lru_cache(maxsize=1)
def get_cursor_paginator() -> CursorPaginator:
    """Get the shared cursor paginator."""
    return CursorPaginator(PaginatorDefaults.from_settings(get_pagination_settings()))


def clamp_limit(limit: int | None) -> int | None:
    """Cap a requested page size at ``max_limit``.

    ``None`` is passed through so the paginator applies its default.
    """
    if limit is None:
        return None
    return min(limit, get_pagination_settings().max_limit)


OffsetPaginatorDep = Annotated[OffsetPaginator, Depends(get_offset_paginator)]
"""Shared offset paginator."""

CursorPaginatorDep = Annotated[CursorPaginator, Depends(get_cursor_paginator)]
"""Shared cursor paginator."""


__all__ = [
    "CursorPaginatorDep",
    "OffsetPaginatorDep",
    "clamp_limit",
    "get_cursor_paginator",
    "get_offset_paginator",
]
