"""Database dependencies for FastAPI route handlers.

Two dependencies are provided:

1. ``get_db_session()`` - one AsyncSession for the request, used by
   repositories for reads and writes.
2. ``get_session_factory()`` - the sessionmaker itself, used by row sources
   that need a fresh session per query (the offset paginator runs its fetch
   and count concurrently, which one AsyncSession cannot do).

Tests override both with ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from book_service.infra.database import AsyncSessionLocal, get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for a request-scoped database session.

    Example:
        @router.get("/genres")
        async def list_genres(session: Annotated[AsyncSession, Depends(get_db_session)]):
            ...
    """
    async with get_async_session() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency returning the shared session factory."""
    return AsyncSessionLocal
