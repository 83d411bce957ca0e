"""Pydantic schemas for the health feature."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

HealthStatus = Literal["healthy", "unhealthy"]


class HealthResponse(BaseModel):
    """Service health summary."""

    status: HealthStatus = Field(description="Overall status")
    service: str = Field(description="Service name")
    version: str = Field(description="Service version")
    checks: dict[str, HealthStatus] = Field(
        default_factory=dict, description="Status of each dependency"
    )
