"""SQLAlchemy models for the genres feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from book_service.core.database import Base, TimestampMixin, UUIDPKMixin


class Genre(Base, UUIDPKMixin, TimestampMixin):
    """Book genre.

    ``key_name`` is the kebab-case slug clients filter books by
    (e.g. ``science-fiction``); ``name`` is the display label.
    """

    __tablename__ = "genres"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name (e.g., 'Science Fiction')",
    )
    key_name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        comment="Kebab-case slug (e.g., 'science-fiction')",
    )

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, key_name={self.key_name!r})>"
