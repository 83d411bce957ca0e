"""SQLAlchemy models for the books feature."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_service.core.database import Base, TimestampMixin, UUIDPKMixin
from book_service.features.genres.models import Genre


class Book(Base, UUIDPKMixin, TimestampMixin):
    """Book in the inventory."""

    __tablename__ = "books"
    __table_args__ = (CheckConstraint("published >= 1", name="published_positive"),)

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of first publication",
    )
    genre_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("genres.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    genre: Mapped[Genre] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title!r})>"
