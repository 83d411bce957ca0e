"""API router for the books feature.

Endpoints:
    GET    /books            - Offset-paginated listing with search and genre filter
    GET    /books/cursor     - Cursor-paginated listing with the same filters
    GET    /books/{book_id}  - Get a single book
    POST   /books            - Add a book
    PATCH  /books/{book_id}  - Update some fields of a book
    DELETE /books/{book_id}  - Delete a book

All endpoints require a bearer token.

Example Usage:
    # Second page of fantasy books, oldest first
    GET /books?genre=fantasy&page=2&per_page=5&sort_field=published&sort_direction=asc

    # Walk the catalogue with cursors
    GET /books/cursor?limit=20
    GET /books/cursor?limit=20&cursor=<meta.pagination.nextCursor>
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from book_service.core.dependencies.auth import CurrentUser
from book_service.core.dependencies.database import get_db_session, get_session_factory
from book_service.core.dependencies.pagination import (
    CursorPaginatorDep,
    OffsetPaginatorDep,
    clamp_limit,
)
from book_service.core.pagination import SortOrder
from book_service.core.schemas import APIResponse, CursorPaginatedResponse, PaginatedResponse
from book_service.features.books.schemas import (
    BookCreate,
    BookResponse,
    BookSortField,
    BookSummary,
    BookUpdate,
)
from book_service.features.books.service import BookService

router = APIRouter(prefix="/books", tags=["books"])
logger = logging.getLogger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]

_AUTH_RESPONSES: dict[int | str, dict[str, str]] = {401: {"description": "Missing or invalid token"}}
_NOT_FOUND: dict[int | str, dict[str, str]] = {404: {"description": "Book not found"}}


# ──────────────────────────────────────────────────────────────
# Listings
# ──────────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=PaginatedResponse[BookSummary],
    summary="List books",
    description="Page through books by page number, optionally filtered by text and genre.",
    responses=_AUTH_RESPONSES,
)
async def list_books(
    _user: CurrentUser,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    paginator: OffsetPaginatorDep,
    page: Annotated[int | None, Query(description="1-based page number")] = None,
    per_page: Annotated[int | None, Query(description="Rows per page")] = None,
    q: Annotated[str | None, Query(description="Substring of title or author")] = None,
    genre: Annotated[str | None, Query(description="Genre key_name")] = None,
    sort_field: Annotated[BookSortField, Query(description="Field to order by")] = "created_at",
    sort_direction: Annotated[SortOrder, Query(description="asc or desc")] = "desc",
) -> PaginatedResponse[BookSummary]:
    service = BookService(session, session_factory=session_factory)
    result = await service.list_books(
        paginator,
        page=page,
        per_page=clamp_limit(per_page),
        q=q,
        genre=genre,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return PaginatedResponse(
        data=[BookSummary.model_validate(book) for book in result.data],
        meta=result.meta,
    )


@router.get(
    "/cursor",
    response_model=CursorPaginatedResponse[BookSummary],
    summary="List books by cursor",
    description=(
        "Page through books with opaque cursors. Pass meta.pagination.nextCursor "
        "back as `cursor` to get the following page."
    ),
    responses={**_AUTH_RESPONSES, 400: {"description": "Malformed cursor"}},
)
async def list_books_cursor(
    _user: CurrentUser,
    session: SessionDep,
    session_factory: SessionFactoryDep,
    paginator: CursorPaginatorDep,
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int | None, Query(description="Rows per page")] = None,
    q: Annotated[str | None, Query(description="Substring of title or author")] = None,
    genre: Annotated[str | None, Query(description="Genre key_name")] = None,
    sort_field: Annotated[BookSortField, Query(description="Field to order by")] = "created_at",
    sort_direction: Annotated[SortOrder, Query(description="asc or desc")] = "desc",
) -> CursorPaginatedResponse[BookSummary]:
    service = BookService(session, session_factory=session_factory)
    result = await service.list_books_cursor(
        paginator,
        cursor=cursor,
        limit=clamp_limit(limit),
        q=q,
        genre=genre,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return CursorPaginatedResponse(
        data=[BookSummary.model_validate(book) for book in result.data],
        meta=result.meta,
    )


# ──────────────────────────────────────────────────────────────
# Book CRUD Endpoints
# ──────────────────────────────────────────────────────────────


@router.get(
    "/{book_id}",
    response_model=APIResponse[BookResponse],
    summary="Get a book",
    responses={**_AUTH_RESPONSES, **_NOT_FOUND},
)
async def get_book(
    book_id: str,
    _user: CurrentUser,
    session: SessionDep,
) -> APIResponse[BookResponse]:
    book = await BookService(session).get_book(book_id)
    return APIResponse(data=BookResponse.model_validate(book))


@router.post(
    "",
    response_model=APIResponse[BookResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    responses={**_AUTH_RESPONSES, 400: {"description": "Unknown genre"}},
)
async def create_book(
    payload: BookCreate,
    _user: CurrentUser,
    session: SessionDep,
) -> APIResponse[BookResponse]:
    book = await BookService(session).create_book(payload)
    await session.commit()
    return APIResponse(message="Book created", data=BookResponse.model_validate(book))


@router.patch(
    "/{book_id}",
    response_model=APIResponse[BookResponse],
    summary="Update a book",
    description="Change one or more fields of a book. An empty body is rejected.",
    responses={**_AUTH_RESPONSES, **_NOT_FOUND, 400: {"description": "Unknown genre"}},
)
async def update_book(
    book_id: str,
    payload: BookUpdate,
    _user: CurrentUser,
    session: SessionDep,
) -> APIResponse[BookResponse]:
    book = await BookService(session).update_book(book_id, payload)
    await session.commit()
    return APIResponse(message="Book updated", data=BookResponse.model_validate(book))


@router.delete(
    "/{book_id}",
    response_model=APIResponse[BookResponse],
    summary="Delete a book",
    description="Delete a book and return it as it was before deletion.",
    responses={**_AUTH_RESPONSES, **_NOT_FOUND},
)
async def delete_book(
    book_id: str,
    _user: CurrentUser,
    session: SessionDep,
) -> APIResponse[BookResponse]:
    service = BookService(session)
    book = await service.delete_book(book_id)
    response = BookResponse.model_validate(book)
    await session.commit()
    logger.info("Book deleted via API", extra={"book_id": book_id})
    return APIResponse(message="Book deleted", data=response)
