"""Application lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from book_service.core.settings import get_app_settings, get_db_settings, get_logging_settings
from book_service.infra.database import close_database, init_database
from book_service.infra.logging import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup configures logging and verifies the database connection (creating
    tables for the SQLite fallback). Shutdown disposes the engine and flushes
    queued log records.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    setup_logging(get_logging_settings())

    await init_database()

    app_settings = get_app_settings()
    db_settings = get_db_settings()
    logger.info(
        "Application is LIVE and ready to serve requests on http://%s:%s",
        app_settings.host,
        app_settings.port,
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
            "database_configured": db_settings.is_configured,
            "api_prefix": app_settings.api_prefix,
        },
    )

    try:
        yield
    finally:
        await close_database()
        logger.info("Application shutdown complete", extra={"service": app_settings.service_name})
        shutdown()
