"""Database infrastructure."""

from book_service.infra.database.session import (
    AsyncSessionLocal,
    build_engine,
    build_session_factory,
    close_database,
    engine,
    get_async_session,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "build_engine",
    "build_session_factory",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
