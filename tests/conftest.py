"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off real infrastructure
    - Database Fixtures: file-backed SQLite engine, session factory, session
    - Application Fixtures: FastAPI app with dependency overrides and HTTP client
    - Authentication Fixtures: a stored user and its bearer headers
    - Data Fixtures: the default catalogue

SQLite runs from a temporary file rather than ``:memory:`` so that the
several sessions a listing opens all see the same database.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

if TYPE_CHECKING:
    from pathlib import Path

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from book_service.features.books.seed import SeedResult
    from book_service.features.users.models import User

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key-for-unit-tests-only")
os.environ.setdefault("AUTH_PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_JSON_LOGS", "false")

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings and shared paginators for every test."""
    from book_service.core.dependencies.pagination import (
        get_cursor_paginator,
        get_offset_paginator,
    )
    from book_service.core.settings import clear_all_caches

    def _clear() -> None:
        clear_all_caches()
        get_offset_paginator.cache_clear()
        get_cursor_paginator.cache_clear()

    _clear()
    yield
    _clear()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Async engine on a fresh SQLite file with every table created."""
    from book_service.core.database import Base
    from book_service.features import load_models
    from book_service.infra.database import build_engine

    load_models()
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    from book_service.infra.database import build_session_factory

    return build_session_factory(db_engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for arranging data; commit to make it visible to the app."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """FastAPI app whose database dependencies point at the test engine."""
    from book_service.app.main import create_app
    from book_service.core.dependencies.database import get_db_session, get_session_factory

    application = create_app()

    async def _get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_db_session
    application.dependency_overrides[get_session_factory] = lambda: session_factory
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTPX client talking to the app in-process.

    Example:
        async def test_health_check(client):
            response = await client.get("/api/v1/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================


@pytest.fixture
async def user(db_session: AsyncSession) -> User:
    """A stored account with password ``TEST_PASSWORD``."""
    from book_service.features.users.models import User
    from book_service.infra.auth import hash_password

    account = User(
        email="reader@example.com",
        name="Test Reader",
        hashed_password=hash_password(TEST_PASSWORD),
    )
    db_session.add(account)
    await db_session.commit()
    return account


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    """Bearer headers for ``user``."""
    from book_service.infra.auth import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user.email)}"}


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
async def catalogue(db_session: AsyncSession) -> SeedResult:
    """Default genres plus the fifteen sample books."""
    from book_service.features.books.seed import seed_catalogue

    result = await seed_catalogue(db_session)
    await db_session.commit()
    return result
