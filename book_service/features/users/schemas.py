"""Pydantic schemas for the users feature."""

from __future__ import annotations

from pydantic import EmailStr, Field

from book_service.core.schemas import CustomBase


class UserResponse(CustomBase):
    """Public view of an account."""

    id: str = Field(..., description="User identifier")
    email: EmailStr = Field(..., description="Login email")
    name: str | None = Field(default=None, description="Display name")


__all__ = ["UserResponse"]
