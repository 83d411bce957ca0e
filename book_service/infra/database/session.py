"""Database engine and session management.

The engine is created at import time from ``PostgresSettings``. PostgreSQL
goes through psycopg3; without a configured database the service runs on a
local SQLite file through aiosqlite.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from book_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()
app_settings = get_app_settings()


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine for ``url`` (defaults to the configured URL)."""
    url = url or db_settings.get_sqlalchemy_url()
    if url.startswith("sqlite"):
        kwargs = {"echo": db_settings.echo}
    else:
        kwargs = db_settings.sqlalchemy_engine_kwargs()
    kwargs["echo"] = kwargs["echo"] or app_settings.debug
    async_engine = create_async_engine(url, **kwargs)

    if async_engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys unenforced unless asked per connection
        @event.listens_for(async_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
            _ = connection_record
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return async_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by request handlers and row sources alike."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Book))
            books = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        yield session


async def init_database(*, create_tables: bool | None = None) -> None:
    """Verify the database connection at startup.

    Args:
        create_tables: Create missing tables. Defaults to True for the SQLite
            fallback only; PostgreSQL schemas are managed by Alembic.

    Raises:
        SQLAlchemyError: If the database cannot be reached.
    """
    if create_tables is None:
        create_tables = not db_settings.is_configured

    logger.info(
        "Initializing database connection",
        extra={"configured": db_settings.is_configured, "create_tables": create_tables},
    )
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_tables:
                await conn.run_sync(_create_all)
    except Exception as e:
        logger.error("Failed to connect to database", extra={"error": str(e)})
        raise
    logger.info("Database connection established successfully")


async def close_database() -> None:
    """Dispose of the engine's pooled connections."""
    logger.info("Closing database connection")
    await engine.dispose()


def _create_all(sync_conn) -> None:
    from book_service.core.database import Base
    from book_service.features import load_models

    load_models()
    Base.metadata.create_all(sync_conn)


__all__ = [
    "AsyncSessionLocal",
    "build_engine",
    "build_session_factory",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
