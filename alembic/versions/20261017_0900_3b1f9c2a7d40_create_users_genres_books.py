"""create users, genres and books

Revision ID: 3b1f9c2a7d40
Revises:
Create Date: 2026-10-17 09:00:00.000000+00:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3b1f9c2a7d40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Timestamp of record creation",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Timestamp of last update",
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID v4 primary key"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Login email, stored lowercase"),
        sa.Column("name", sa.String(length=100), nullable=True, comment="Display name"),
        sa.Column(
            "hashed_password",
            sa.String(length=255),
            nullable=False,
            comment="bcrypt hash of the password",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_index(op.f("ix_users_created_at"), "users", ["created_at"])

    op.create_table(
        "genres",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID v4 primary key"),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Display name (e.g., 'Science Fiction')",
        ),
        sa.Column(
            "key_name",
            sa.String(length=100),
            nullable=False,
            comment="Kebab-case slug (e.g., 'science-fiction')",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_genres")),
        sa.UniqueConstraint("key_name", name=op.f("uq_genres_key_name")),
    )
    op.create_index(op.f("ix_genres_created_at"), "genres", ["created_at"])

    op.create_table(
        "books",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID v4 primary key"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("published", sa.Integer(), nullable=False, comment="Year of first publication"),
        sa.Column("genre_id", sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("published >= 1", name=op.f("ck_books_published_positive")),
        sa.ForeignKeyConstraint(
            ["genre_id"],
            ["genres.id"],
            name=op.f("fk_books_genre_id_genres"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_books")),
    )
    op.create_index(op.f("ix_books_title"), "books", ["title"])
    op.create_index(op.f("ix_books_author"), "books", ["author"])
    op.create_index(op.f("ix_books_genre_id"), "books", ["genre_id"])
    op.create_index(op.f("ix_books_created_at"), "books", ["created_at"])


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f("ix_books_created_at"), table_name="books")
    op.drop_index(op.f("ix_books_genre_id"), table_name="books")
    op.drop_index(op.f("ix_books_author"), table_name="books")
    op.drop_index(op.f("ix_books_title"), table_name="books")
    op.drop_table("books")
    op.drop_index(op.f("ix_genres_created_at"), table_name="genres")
    op.drop_table("genres")
    op.drop_index(op.f("ix_users_created_at"), table_name="users")
    op.drop_table("users")
