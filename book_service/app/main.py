"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from book_service.app.exception_handlers import configure_exception_handlers
from book_service.app.lifespan import lifespan
from book_service.app.middleware import configure_middleware
from book_service.app.router import setup_routers
from book_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache, so tests that change
    the environment must clear the caches before calling this.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.docs_url if app_settings.docs_enabled else None,
        redoc_url=app_settings.redoc_url if app_settings.docs_enabled else None,
        openapi_url=app_settings.openapi_url if app_settings.docs_enabled else None,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Configure exception handlers (must be before middleware)
    configure_exception_handlers(app)

    configure_middleware(app)

    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
