"""FastAPI dependencies shared across features."""

from book_service.core.dependencies.auth import CurrentUser, get_current_user
from book_service.core.dependencies.database import get_db_session, get_session_factory
from book_service.core.dependencies.pagination import (
    CursorPaginatorDep,
    OffsetPaginatorDep,
    clamp_limit,
    get_cursor_paginator,
    get_offset_paginator,
)

__all__ = [
    "CurrentUser",
    "CursorPaginatorDep",
    "OffsetPaginatorDep",
    "clamp_limit",
    "get_current_user",
    "get_cursor_paginator",
    "get_db_session",
    "get_offset_paginator",
    "get_session_factory",
]
