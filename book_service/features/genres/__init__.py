"""Genre catalogue used to classify and filter books."""

from __future__ import annotations

from .models import Genre
from .repository import GenreRepository, get_genre_repository
from .schemas import GenreResponse
from .service import GenreService

__all__ = [
    "Genre",
    "GenreRepository",
    "GenreResponse",
    "GenreService",
    "get_genre_repository",
]
