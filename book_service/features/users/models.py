"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from book_service.core.database import Base, TimestampMixin, UUIDPKMixin


class User(Base, UUIDPKMixin, TimestampMixin):
    """Account that can sign in and manage the inventory."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Login email, stored lowercase",
    )
    name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Display name",
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the password",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
