"""Base schema classes for API responses.

Every successful response is an envelope ``{"message": ..., "data": ...}``.
Paginated responses add ``meta.pagination``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from book_service.core.pagination.schemas import CursorMeta, OffsetMeta

DEFAULT_MESSAGE = "Success"


class CustomBase(BaseModel):
    """Base model with common configuration for request/response schemas.

    Example:
        class GenreResponse(CustomBase):
            id: str
            name: str
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        populate_by_name=True,
        # Silently drop unexpected fields
        extra="ignore",
        str_strip_whitespace=True,
    )


class APIResponse[T](BaseModel):
    """Generic response envelope.

    Example:
        @router.get("/me", response_model=APIResponse[UserResponse])
        async def me(user: CurrentUser) -> APIResponse[UserResponse]:
            return APIResponse(data=UserResponse.model_validate(user))
    """

    message: str = Field(default=DEFAULT_MESSAGE, description="Response message")
    data: T = Field(description="Response data")


class PaginatedResponse[T](BaseModel):
    """Offset-paginated response envelope."""

    message: str = Field(default=DEFAULT_MESSAGE, description="Response message")
    data: list[T] = Field(description="Rows on this page")
    meta: OffsetMeta = Field(description="Page position and totals")


class CursorPaginatedResponse[T](BaseModel):
    """Cursor-paginated response envelope."""

    message: str = Field(default=DEFAULT_MESSAGE, description="Response message")
    data: list[T] = Field(description="Rows on this page")
    meta: CursorMeta = Field(description="Navigation cursors")


__all__ = [
    "DEFAULT_MESSAGE",
    "APIResponse",
    "CursorPaginatedResponse",
    "CustomBase",
    "PaginatedResponse",
]
