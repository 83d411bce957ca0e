"""Book inventory: CRUD plus offset and cursor listings."""

from __future__ import annotations

from .models import Book
from .repository import BookRepository, get_book_repository
from .schemas import BookCreate, BookResponse, BookSummary, BookUpdate
from .service import BookService

__all__ = [
    "Book",
    "BookCreate",
    "BookRepository",
    "BookResponse",
    "BookService",
    "BookSummary",
    "BookUpdate",
    "get_book_repository",
]
