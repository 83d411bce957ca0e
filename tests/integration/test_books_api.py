"""Integration tests for the books API."""
from __future__ import annotations

import base64

import pytest

from book_service.core.settings import clear_all_caches
from book_service.features.books.seed import SAMPLE_BOOKS

pytestmark = pytest.mark.integration

BOOKS = "/api/v1/books"
GENRES = "/api/v1/genres"


async def _genre_id(client, auth_headers, key_name: str) -> str:
    response = await client.get(GENRES, headers=auth_headers)
    return next(g["id"] for g in response.json()["data"] if g["key_name"] == key_name)


async def _book_id(client, auth_headers, title: str) -> str:
    response = await client.get(BOOKS, params={"q": title}, headers=auth_headers)
    return next(b["id"] for b in response.json()["data"] if b["title"] == title)


# ──────────────────────────────────────────────────────────────
# Offset listing
# ──────────────────────────────────────────────────────────────


class TestListBooks:
    """GET /books."""

    async def test_requires_token(self, client, catalogue):
        response = await client.get(BOOKS)

        assert response.status_code == 401

    async def test_default_page(self, client, auth_headers, catalogue):
        response = await client.get(BOOKS, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Success"
        assert len(body["data"]) == 10
        assert body["meta"]["pagination"] == {
            "page": 1,
            "limit": 10,
            "total": 15,
            "totalPages": 2,
            "previousPage": None,
            "nextPage": 2,
        }

    async def test_row_shape(self, client, auth_headers, catalogue):
        response = await client.get(
            BOOKS, params={"q": "Dune"}, headers=auth_headers
        )

        [row] = response.json()["data"]
        assert set(row) == {"id", "title", "author", "published", "genre"}
        assert row["genre"] == {"name": "Science Fiction"}

    async def test_second_page_sorted_by_title(self, client, auth_headers, catalogue):
        response = await client.get(
            BOOKS,
            params={"page": 2, "per_page": 5, "sort_field": "title", "sort_direction": "asc"},
            headers=auth_headers,
        )

        titles = sorted(title for title, *_ in SAMPLE_BOOKS)
        assert [b["title"] for b in response.json()["data"]] == titles[5:10]
        pagination = response.json()["meta"]["pagination"]
        assert pagination["totalPages"] == 3
        assert (pagination["previousPage"], pagination["nextPage"]) == (1, 3)

    async def test_sort_by_published_desc(self, client, auth_headers, catalogue):
        response = await client.get(
            BOOKS,
            params={"per_page": 3, "sort_field": "published", "sort_direction": "desc"},
            headers=auth_headers,
        )

        years = [b["published"] for b in response.json()["data"]]
        assert years == [2018, 2012, 2012]

    async def test_search_matches_title_or_author(self, client, auth_headers, catalogue):
        response = await client.get(BOOKS, params={"q": "tolkien"}, headers=auth_headers)

        assert [b["title"] for b in response.json()["data"]] == ["The Hobbit"]

    async def test_genre_filter(self, client, auth_headers, catalogue):
        response = await client.get(
            BOOKS, params={"genre": "fantasy", "sort_field": "published", "sort_direction": "asc"},
            headers=auth_headers,
        )

        body = response.json()
        assert [b["title"] for b in body["data"]] == [
            "The Hobbit",
            "A Game of Thrones",
            "Harry Potter and the Sorcerer's Stone",
        ]
        assert body["meta"]["pagination"]["total"] == 3

    async def test_unknown_genre_is_empty(self, client, auth_headers, catalogue):
        response = await client.get(BOOKS, params={"genre": "poetry"}, headers=auth_headers)

        body = response.json()
        assert body["data"] == []
        assert body["meta"]["pagination"] == {
            "page": 1,
            "limit": 10,
            "total": 0,
            "totalPages": 1,
            "previousPage": None,
            "nextPage": None,
        }

    async def test_per_page_capped(self, client, auth_headers, catalogue, monkeypatch):
        monkeypatch.setenv("PAGINATION_MAX_LIMIT", "4")
        clear_all_caches()

        response = await client.get(BOOKS, params={"per_page": 50}, headers=auth_headers)

        assert response.json()["meta"]["pagination"]["limit"] == 4

    async def test_page_zero_clamped(self, client, auth_headers, catalogue):
        response = await client.get(BOOKS, params={"page": 0, "per_page": 0}, headers=auth_headers)

        meta = response.json()["meta"]["pagination"]
        assert (meta["page"], meta["limit"]) == (1, 1)

    async def test_invalid_sort_field(self, client, auth_headers, catalogue):
        response = await client.get(BOOKS, params={"sort_field": "colour"}, headers=auth_headers)

        assert response.status_code == 422


# ──────────────────────────────────────────────────────────────
# Cursor listing
# ──────────────────────────────────────────────────────────────


class TestListBooksCursor:
    """GET /books/cursor."""

    async def test_walk_whole_catalogue(self, client, auth_headers, catalogue):
        seen: list[str] = []
        params: dict[str, str | int] = {"limit": 4}
        pages = 0

        while True:
            response = await client.get(f"{BOOKS}/cursor", params=params, headers=auth_headers)
            assert response.status_code == 200
            body = response.json()
            pagination = body["meta"]["pagination"]
            assert pagination["hasPreviousPage"] is (pages > 0)
            seen.extend(b["id"] for b in body["data"])
            pages += 1
            if not pagination["hasNextPage"]:
                assert pagination["nextCursor"] is None
                break
            params = {"limit": 4, "cursor": pagination["nextCursor"]}

        assert pages == 4
        assert len(seen) == 15
        assert len(set(seen)) == 15

    async def test_first_page_meta(self, client, auth_headers, catalogue):
        response = await client.get(
            f"{BOOKS}/cursor",
            params={"limit": 5, "sort_field": "title", "sort_direction": "asc"},
            headers=auth_headers,
        )

        body = response.json()
        titles = sorted(title for title, *_ in SAMPLE_BOOKS)
        assert [b["title"] for b in body["data"]] == titles[:5]
        pagination = body["meta"]["pagination"]
        assert pagination["limit"] == 5
        assert pagination["hasNextPage"] is True
        assert pagination["hasPreviousPage"] is False
        assert pagination["previousCursor"] is None

    async def test_filters_apply(self, client, auth_headers, catalogue):
        response = await client.get(
            f"{BOOKS}/cursor",
            params={"genre": "non-fiction", "q": "ar", "sort_field": "title", "sort_direction": "asc"},
            headers=auth_headers,
        )

        assert [b["title"] for b in response.json()["data"]] == [
            "Educated",
            "Sapiens: A Brief History of Humankind",
        ]

    async def test_malformed_cursor(self, client, auth_headers, catalogue):
        response = await client.get(
            f"{BOOKS}/cursor", params={"cursor": "definitely-not-a-cursor"}, headers=auth_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "invalid-cursor"
        assert body["detail"] == "Invalid cursor format"

    async def test_nested_payload_cursor_is_bad_request(self, client, auth_headers, catalogue):
        cursor = base64.urlsafe_b64encode(b"[" * 100_000).decode()

        response = await client.get(
            f"{BOOKS}/cursor", params={"cursor": cursor}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-cursor"


# ──────────────────────────────────────────────────────────────
# CRUD
# ──────────────────────────────────────────────────────────────


class TestGetBook:
    """GET /books/{id}."""

    async def test_found(self, client, auth_headers, catalogue):
        book_id = await _book_id(client, auth_headers, "Dune")

        response = await client.get(f"{BOOKS}/{book_id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Dune"
        assert data["genre"]["key_name"] == "science-fiction"
        assert data["genre_id"] == data["genre"]["id"]
        assert "created_at" in data
        assert "updated_at" in data

    async def test_not_found(self, client, auth_headers, catalogue):
        response = await client.get(f"{BOOKS}/does-not-exist", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["type"] == "not-found"


class TestCreateBook:
    """POST /books."""

    async def test_created(self, client, auth_headers, catalogue):
        genre_id = await _genre_id(client, auth_headers, "fantasy")

        response = await client.post(
            BOOKS,
            json={
                "title": "The Name of the Wind",
                "author": "Patrick Rothfuss",
                "published": 2007,
                "genre_id": genre_id,
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Book created"
        assert body["data"]["genre"]["name"] == "Fantasy"

        listing = await client.get(BOOKS, headers=auth_headers)
        assert listing.json()["meta"]["pagination"]["total"] == 16

    async def test_unknown_genre(self, client, auth_headers, catalogue):
        response = await client.post(
            BOOKS,
            json={"title": "Orphan", "author": "Nobody", "published": 2000, "genre_id": "missing"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["type"] == "foreign-key-violation"

    async def test_invalid_payload(self, client, auth_headers, catalogue):
        response = await client.post(
            BOOKS, json={"title": "", "author": "A", "published": 0}, headers=auth_headers
        )

        assert response.status_code == 422
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"body.title", "body.published", "body.genre_id"}


class TestUpdateBook:
    """PATCH /books/{id}."""

    async def test_partial_update(self, client, auth_headers, catalogue):
        book_id = await _book_id(client, auth_headers, "Dune")
        genre_id = await _genre_id(client, auth_headers, "fantasy")

        response = await client.patch(
            f"{BOOKS}/{book_id}",
            json={"published": 1966, "genre_id": genre_id},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert response.json()["message"] == "Book updated"
        assert data["title"] == "Dune"
        assert data["published"] == 1966
        assert data["genre"]["key_name"] == "fantasy"

    async def test_empty_body_rejected(self, client, auth_headers, catalogue):
        book_id = await _book_id(client, auth_headers, "Dune")

        response = await client.patch(f"{BOOKS}/{book_id}", json={}, headers=auth_headers)

        assert response.status_code == 422

    async def test_missing_book(self, client, auth_headers, catalogue):
        response = await client.patch(
            f"{BOOKS}/does-not-exist", json={"title": "X"}, headers=auth_headers
        )

        assert response.status_code == 404


class TestDeleteBook:
    """DELETE /books/{id}."""

    async def test_deleted(self, client, auth_headers, catalogue):
        book_id = await _book_id(client, auth_headers, "Dune")

        response = await client.delete(f"{BOOKS}/{book_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Book deleted"
        assert response.json()["data"]["title"] == "Dune"

        again = await client.get(f"{BOOKS}/{book_id}", headers=auth_headers)
        assert again.status_code == 404

    async def test_missing_book(self, client, auth_headers, catalogue):
        response = await client.delete(f"{BOOKS}/does-not-exist", headers=auth_headers)

        assert response.status_code == 404
