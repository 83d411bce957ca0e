"""API router for the health feature.

Endpoints:
    GET /health - Service and database status (503 when the database is down)
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from book_service.core.dependencies.database import get_db_session
from book_service.core.settings import get_app_settings
from book_service.features.health.schemas import HealthResponse, HealthStatus

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Report whether the service can reach its database.",
    responses={503: {"description": "Database unreachable"}},
)
async def health_check(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthResponse:
    database: HealthStatus = "healthy"
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed", extra={"error": str(exc)})
        database = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    settings = get_app_settings()
    return HealthResponse(
        status=database,
        service=settings.service_name,
        version=settings.version,
        checks={"database": database},
    )


__all__ = ["router"]
