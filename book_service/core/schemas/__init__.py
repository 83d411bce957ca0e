"""Shared API schemas."""

from book_service.core.schemas.base import (
    DEFAULT_MESSAGE,
    APIResponse,
    CursorPaginatedResponse,
    CustomBase,
    PaginatedResponse,
)
from book_service.core.schemas.error import ProblemDetail, ValidationError, ValidationProblemDetail

__all__ = [
    "DEFAULT_MESSAGE",
    "APIResponse",
    "CursorPaginatedResponse",
    "CustomBase",
    "PaginatedResponse",
    "ProblemDetail",
    "ValidationError",
    "ValidationProblemDetail",
]
