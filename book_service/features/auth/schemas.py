"""Pydantic schemas for the auth feature."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator


class SignInRequest(BaseModel):
    """Email/password credentials."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=72, description="Plain password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are stored and matched lowercase."""
        return v.strip().lower()


class SignUpRequest(SignInRequest):
    """New account payload."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Plain password (bcrypt uses at most 72 bytes)",
    )
    name: str | None = Field(default=None, max_length=100, description="Display name")


class TokenResponse(BaseModel):
    """Bearer token issued on sign-up and sign-in."""

    access_token: str = Field(..., description="Signed JWT")
    token_type: Literal["bearer"] = "bearer"


__all__ = ["SignInRequest", "SignUpRequest", "TokenResponse"]
