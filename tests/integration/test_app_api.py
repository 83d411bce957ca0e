"""Integration tests for health, genres and cross-cutting middleware."""
from __future__ import annotations

import pytest
from sqlalchemy import func, select

from book_service.features.books.models import Book
from book_service.features.books.seed import DEFAULT_GENRES, SAMPLE_BOOKS, seed_catalogue
from book_service.features.genres.models import Genre

pytestmark = pytest.mark.integration


class TestHealth:
    """GET /health."""

    async def test_healthy(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "book-service",
            "version": "1.0.0",
            "checks": {"database": "healthy"},
        }

    async def test_database_down(self, app, client):
        from sqlalchemy.exc import OperationalError

        from book_service.core.dependencies.database import get_db_session

        class _BrokenSession:
            async def execute(self, *_args, **_kwargs):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        async def _broken():
            yield _BrokenSession()

        app.dependency_overrides[get_db_session] = _broken

        response = await client.get("/api/v1/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestGenres:
    """GET /genres."""

    async def test_ordered_by_name(self, client, auth_headers, catalogue):
        response = await client.get("/api/v1/genres", headers=auth_headers)

        assert response.status_code == 200
        names = [g["name"] for g in response.json()["data"]]
        assert names == sorted(name for _, name in DEFAULT_GENRES)
        assert set(response.json()["data"][0]) == {"id", "name", "key_name"}

    async def test_requires_token(self, client):
        response = await client.get("/api/v1/genres")

        assert response.status_code == 401


class TestMiddleware:
    """Request id and timing headers."""

    async def test_request_id_generated(self, client):
        response = await client.get("/api/v1/health")

        assert len(response.headers["X-Request-ID"]) == 36
        assert float(response.headers["X-Process-Time"]) >= 0

    async def test_request_id_echoed(self, client):
        response = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-me-123"})

        assert response.headers["X-Request-ID"] == "trace-me-123"

    async def test_request_id_in_problem_body(self, client):
        response = await client.get(
            "/api/v1/books/cursor", headers={"X-Request-ID": "trace-me-456"}
        )

        assert response.status_code == 401
        assert response.json()["request_id"] == "trace-me-456"


class TestSeed:
    """seed_catalogue."""

    async def test_idempotent(self, db_session, catalogue):
        assert catalogue.genres_created == len(DEFAULT_GENRES)
        assert catalogue.books_created == len(SAMPLE_BOOKS)

        again = await seed_catalogue(db_session)
        await db_session.commit()

        assert (again.genres_created, again.books_created, again.books_skipped) == (0, 0, 15)
        genres = (await db_session.execute(select(func.count()).select_from(Genre))).scalar_one()
        books = (await db_session.execute(select(func.count()).select_from(Book))).scalar_one()
        assert (genres, books) == (len(DEFAULT_GENRES), len(SAMPLE_BOOKS))
