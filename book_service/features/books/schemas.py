"""Pydantic schemas for the books feature."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from book_service.core.schemas import CustomBase
from book_service.features.genres.schemas import GenreResponse

BookSortField = Literal["title", "author", "published", "created_at"]
"""Columns the book listings can be ordered by."""

SUMMARY_COLUMNS = ("id", "title", "author", "published", "genre_id", "created_at")
"""Columns loaded for list rows; every ``BookSortField`` must be among them."""


class BookCreate(BaseModel):
    """Payload used when adding a book."""

    title: str = Field(..., min_length=1, max_length=255, description="Book title")
    author: str = Field(..., min_length=1, max_length=255, description="Author name")
    published: int = Field(..., ge=1, description="Year of first publication")
    genre_id: str = Field(..., min_length=1, description="Identifier of an existing genre")


class BookUpdate(BaseModel):
    """Partial update; at least one field must be given."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    published: int | None = Field(default=None, ge=1)
    genre_id: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def require_one_field(self) -> BookUpdate:
        """Reject an update that would change nothing."""
        if not self.model_dump(exclude_none=True):
            msg = "At least one field must be provided for update"
            raise ValueError(msg)
        return self


class BookGenre(CustomBase):
    """Genre label embedded in list rows."""

    name: str


class BookSummary(CustomBase):
    """Row returned by the book listings."""

    id: str
    title: str
    author: str
    published: int
    genre: BookGenre


class BookResponse(CustomBase):
    """Full representation of a single book."""

    id: str
    title: str
    author: str
    published: int
    genre_id: str
    genre: GenreResponse
    created_at: datetime
    updated_at: datetime


__all__ = [
    "SUMMARY_COLUMNS",
    "BookCreate",
    "BookGenre",
    "BookResponse",
    "BookSortField",
    "BookSummary",
    "BookUpdate",
]
