"""Pagination settings for API responses.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=25, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Rows per page when a request does not say.
        max_limit: Largest page a client may request.
        default_sort_field: Field pages are ordered by when a request does not say.
        default_sort_order: Direction used when a request does not say.
    """

    default_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    default_sort_field: str = Field(
        default="created_at",
        min_length=1,
        description="Default sort field",
    )
    default_sort_order: Literal["asc", "desc"] = Field(
        default="desc",
        description="Default sort direction",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
