"""Database management commands.

Example:bash
    # Create tables on the configured database
    book-service db init

    # Insert default genres and sample books
    book-service db seed
"""

import sys

import click
from sqlalchemy.exc import SQLAlchemyError

from book_service.cli.utils import coro, error, info, success
from book_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity and create any missing tables."""
    from book_service.infra.database import close_database, init_database

    db_settings = get_db_settings()
    backend = "SQLite" if db_settings.is_sqlite else "PostgreSQL"
    info(f"Initializing {backend} database...")

    try:
        await init_database(create_tables=True)
    except SQLAlchemyError as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        await close_database()

    success("Database tables are in place")


@db.command()
@coro
async def seed() -> None:
    """Insert default genres and sample books (skips rows that exist)."""
    from book_service.features.books.seed import seed_catalogue
    from book_service.infra.database import close_database, get_async_session

    info("Seeding catalogue...")
    try:
        async with get_async_session() as session:
            result = await seed_catalogue(session)
            await session.commit()
    except SQLAlchemyError as e:
        error(f"Seeding failed: {e}")
        sys.exit(1)
    finally:
        await close_database()

    success(
        f"Seeded {result.genres_created} genre(s) and {result.books_created} book(s); "
        f"{result.books_skipped} book(s) already present"
    )
