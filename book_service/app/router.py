"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from book_service.core.settings import get_app_settings
from book_service.features.auth.router import router as auth_router
from book_service.features.books.router import router as books_router
from book_service.features.genres.router import router as genres_router
from book_service.features.health.router import router as health_router
from book_service.features.users.router import router as users_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from book_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(health_router, prefix=api_prefix)
    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(genres_router, prefix=api_prefix)
    app.include_router(books_router, prefix=api_prefix)

    logger.info("Routers registered", extra={"api_prefix": api_prefix})
