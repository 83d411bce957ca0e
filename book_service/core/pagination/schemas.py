"""Pagination request options and result metadata.

Request options are loose on purpose: any field may be omitted and numeric
fields may be zero or negative. Paginators resolve omitted fields from their
defaults and clamp numbers to at least 1, so the models here do not reject
out-of-range values.

Metadata models serialise with camelCase aliases (``totalPages``,
``hasNextPage``) so the HTTP surface keeps its established shape.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from book_service.core.pagination.query import SortOrder


class PageRequest(BaseModel):
    """Offset pagination options."""

    page: int | None = Field(default=None, description="1-based page number")
    limit: int | None = Field(default=None, description="Rows per page")
    sort_field: str | None = Field(default=None, description="Field to order by")
    sort_order: SortOrder | None = Field(default=None, description="asc or desc")

    model_config = ConfigDict(frozen=True)


class CursorRequest(BaseModel):
    """Cursor pagination options."""

    cursor: str | None = Field(default=None, description="Opaque cursor from a previous page")
    limit: int | None = Field(default=None, description="Rows per page")
    sort_field: str | None = Field(default=None, description="Field to order by")
    sort_order: SortOrder | None = Field(default=None, description="asc or desc")

    model_config = ConfigDict(frozen=True)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class OffsetPagination(_CamelModel):
    """Offset page position and totals."""

    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Rows per page")
    total: int = Field(description="Rows matching the filter across all pages")
    total_pages: int = Field(description="Number of pages, never less than 1")
    previous_page: int | None = Field(
        default=None, description="Page before this one, null on the first page"
    )
    next_page: int | None = Field(
        default=None, description="Page after this one, null on or past the last page"
    )


class CursorPagination(_CamelModel):
    """Cursor page navigation."""

    limit: int = Field(description="Rows per page")
    has_next_page: bool = Field(description="More rows exist after this page")
    has_previous_page: bool = Field(
        description="Page was requested with a cursor (heuristic, no look-back query)"
    )
    next_cursor: str | None = Field(default=None, description="Cursor for the next page")
    previous_cursor: str | None = Field(
        default=None, description="Cursor anchored at the first row of this page"
    )


class OffsetMeta(_CamelModel):
    pagination: OffsetPagination


class CursorMeta(_CamelModel):
    pagination: CursorPagination


@dataclass(slots=True, frozen=True)
class OffsetPage[T]:
    """Offset paginator result.

    Example:
        page = await paginator.paginate(source, args, PageRequest(page=2, limit=20))
        print(f"{len(page.data)} of {page.meta.pagination.total}")
    """

    data: Sequence[T]
    meta: OffsetMeta


@dataclass(slots=True, frozen=True)
class CursorPage[T]:
    """Cursor paginator result. ``data`` never holds more than ``limit`` rows."""

    data: Sequence[T]
    meta: CursorMeta


__all__ = [
    "CursorMeta",
    "CursorPage",
    "CursorPagination",
    "CursorRequest",
    "OffsetMeta",
    "OffsetPage",
    "OffsetPagination",
    "PageRequest",
]
