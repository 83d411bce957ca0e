"""Default genres and sample books for a fresh database.

Seeding is idempotent: genres are matched on ``key_name`` and books on
title, author, year and genre, so running it twice adds nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from book_service.features.books.models import Book
from book_service.features.books.repository import get_book_repository
from book_service.features.genres.models import Genre
from book_service.features.genres.repository import get_genre_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

# (key_name, name)
DEFAULT_GENRES: tuple[tuple[str, str], ...] = (
    ("science-fiction", "Science Fiction"),
    ("fantasy", "Fantasy"),
    ("mystery", "Mystery"),
    ("non-fiction", "Non-Fiction"),
    ("romance", "Romance"),
)

# (title, author, published, genre key_name)
SAMPLE_BOOKS: tuple[tuple[str, str, int, str], ...] = (
    ("Dune", "Frank Herbert", 1965, "science-fiction"),
    ("Neuromancer", "William Gibson", 1984, "science-fiction"),
    ("Foundation", "Isaac Asimov", 1951, "science-fiction"),
    ("The Hobbit", "J.R.R. Tolkien", 1937, "fantasy"),
    ("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", 1997, "fantasy"),
    ("A Game of Thrones", "George R.R. Martin", 1996, "fantasy"),
    ("The Girl with the Dragon Tattoo", "Stieg Larsson", 2005, "mystery"),
    ("Gone Girl", "Gillian Flynn", 2012, "mystery"),
    ("The Da Vinci Code", "Dan Brown", 2003, "mystery"),
    ("Sapiens: A Brief History of Humankind", "Yuval Noah Harari", 2011, "non-fiction"),
    ("Educated", "Tara Westover", 2018, "non-fiction"),
    ("The Immortal Life of Henrietta Lacks", "Rebecca Skloot", 2010, "non-fiction"),
    ("Pride and Prejudice", "Jane Austen", 1813, "romance"),
    ("The Fault in Our Stars", "John Green", 2012, "romance"),
    ("Me Before You", "Jojo Moyes", 2012, "romance"),
)


@dataclass(slots=True)
class SeedResult:
    """How many rows a seed run inserted."""

    genres_created: int = 0
    books_created: int = 0
    books_skipped: int = 0


async def seed_catalogue(session: AsyncSession) -> SeedResult:
    """Insert missing default genres and sample books.

    The caller owns the transaction and must commit.
    """
    genre_repo = get_genre_repository()
    book_repo = get_book_repository()
    result = SeedResult()

    genres: dict[str, Genre] = {}
    for key_name, name in DEFAULT_GENRES:
        genre = await genre_repo.get_by_key_name(session, key_name)
        if genre is None:
            genre = await genre_repo.create(session, Genre(key_name=key_name, name=name))
            result.genres_created += 1
        elif genre.name != name:
            genre.name = name
        genres[key_name] = genre

    for title, author, published, key_name in SAMPLE_BOOKS:
        genre_id = genres[key_name].id
        existing = await book_repo.find_duplicate(
            session, title=title, author=author, published=published, genre_id=genre_id
        )
        if existing is not None:
            result.books_skipped += 1
            continue
        await book_repo.create(
            session,
            Book(title=title, author=author, published=published, genre_id=genre_id),
        )
        result.books_created += 1

    await session.flush()
    logger.info(
        "Catalogue seeded",
        extra={
            "genres_created": result.genres_created,
            "books_created": result.books_created,
            "books_skipped": result.books_skipped,
        },
    )
    return result
