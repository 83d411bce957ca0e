"""Pydantic schemas for the genres feature."""

from __future__ import annotations

from pydantic import Field

from book_service.core.schemas import CustomBase


class GenreResponse(CustomBase):
    """Genre as returned from the API."""

    id: str = Field(..., description="Genre identifier")
    name: str = Field(..., description="Display name (e.g., 'Science Fiction')")
    key_name: str = Field(..., description="Slug used by the books genre filter")


__all__ = ["GenreResponse"]
