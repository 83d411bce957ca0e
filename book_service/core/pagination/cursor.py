"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode a position in an ordered result set.
They carry the primary key of the anchor row and the value of the sort
field, which together are enough to seek past that row on the next query.

The cursor format is:
1. Compact JSON object with ``id``, ``sortValue`` and ``sortType``
2. Base64 URL-safe encoded for use in query strings

Example cursor payload:
    {"id":"4b0c...","sortValue":"2025-01-15T10:30:00+00:00","sortType":"datetime"}

The format is a public contract: clients store cursors between requests, so
changing it breaks every cursor already handed out.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from book_service.core.exceptions import InvalidCursorFormatError

SortValue = str | int | float | datetime
SortType = Literal["str", "int", "float", "datetime"]

# Longest cursor accepted by decode; well above any real anchor
MAX_CURSOR_LENGTH = 2048


class CursorData(BaseModel):
    """Decoded cursor.

    Attributes:
        id: Primary key of the anchor row (tie-breaker)
        sort_value: Value of the sort field on the anchor row
    """

    id: str = Field(description="Primary key of the anchor row")
    sort_value: SortValue = Field(description="Sort field value of the anchor row")

    model_config = {"frozen": True, "strict": True}


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode(CursorData(id="abc-123", sort_value=now))
        data = CursorCodec.decode(cursor)
        assert data.sort_value == now
    """

    @staticmethod
    def encode(data: CursorData) -> str:
        """Encode cursor data to an opaque URL-safe string.

        Args:
            data: Anchor id and sort value

        Returns:
            URL-safe base64 encoded string
        """
        sort_value, sort_type = CursorCodec._serialize_value(data.sort_value)
        payload = {"id": data.id, "sortValue": sort_value, "sortType": sort_type}
        json_str = json.dumps(payload, separators=(",", ":"))
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> CursorData:
        """Decode a cursor string to cursor data.

        Args:
            cursor: URL-safe base64 encoded cursor string

        Returns:
            CursorData with the anchor id and sort value

        Raises:
            InvalidCursorFormatError: If the cursor is too long, not base64,
                not JSON, or lacks the id/sortValue fields
        """
        if len(cursor) > MAX_CURSOR_LENGTH:
            raise InvalidCursorFormatError(cursor, reason="cursor too long")
        try:
            raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeError, ValueError, RecursionError) as e:
            raise InvalidCursorFormatError(cursor, reason=str(e)) from e

        if not isinstance(payload, dict):
            raise InvalidCursorFormatError(cursor, reason="payload is not an object")
        if "id" not in payload or "sortValue" not in payload:
            raise InvalidCursorFormatError(cursor, reason="missing id or sortValue")

        anchor_id = payload["id"]
        if isinstance(anchor_id, bool) or not isinstance(anchor_id, str | int):
            raise InvalidCursorFormatError(cursor, reason="id must be a string")

        sort_value = CursorCodec._deserialize_value(
            cursor, payload["sortValue"], payload.get("sortType")
        )
        return CursorData(id=str(anchor_id), sort_value=sort_value)

    @staticmethod
    def from_row(row: Any, sort_field: str) -> str:
        """Create a cursor from a result row.

        Args:
            row: Mapping or model instance exposing ``id`` and ``sort_field``
            sort_field: Name of the field the page is ordered by

        Returns:
            Encoded cursor string
        """
        anchor_id = read_field(row, "id")
        sort_value = read_field(row, sort_field)
        if isinstance(anchor_id, UUID):
            anchor_id = str(anchor_id)
        if isinstance(sort_value, UUID):
            sort_value = str(sort_value)
        return CursorCodec.encode(CursorData(id=str(anchor_id), sort_value=sort_value))

    @staticmethod
    def _serialize_value(value: SortValue) -> tuple[Any, SortType]:
        if isinstance(value, datetime):
            return value.isoformat(), "datetime"
        if isinstance(value, bool):
            raise TypeError("Boolean sort values are not supported in cursors")
        if isinstance(value, int):
            return value, "int"
        if isinstance(value, float):
            return value, "float"
        return str(value), "str"

    @staticmethod
    def _deserialize_value(cursor: str, value: Any, sort_type: Any) -> SortValue:
        if sort_type is None:
            # Untagged payloads carry plain JSON scalars
            if isinstance(value, bool) or not isinstance(value, str | int | float):
                raise InvalidCursorFormatError(cursor, reason="unsupported sortValue")
            return value

        match sort_type:
            case "datetime":
                if not isinstance(value, str):
                    raise InvalidCursorFormatError(cursor, reason="datetime must be a string")
                try:
                    return datetime.fromisoformat(value)
                except ValueError as e:
                    raise InvalidCursorFormatError(cursor, reason=str(e)) from e
            case "int":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidCursorFormatError(cursor, reason="sortValue is not an int")
                return value
            case "float":
                if isinstance(value, bool) or not isinstance(value, int | float):
                    raise InvalidCursorFormatError(cursor, reason="sortValue is not a float")
                return float(value)
            case "str":
                if not isinstance(value, str):
                    raise InvalidCursorFormatError(cursor, reason="sortValue is not a string")
                return value
            case _:
                raise InvalidCursorFormatError(cursor, reason=f"unknown sortType {sort_type!r}")


def read_field(row: Any, name: str) -> Any:
    """Read a field from a mapping row or an attribute-style row."""
    if isinstance(row, Mapping):
        return row[name]
    return getattr(row, name)


__all__ = ["MAX_CURSOR_LENGTH", "CursorCodec", "CursorData", "SortValue", "read_field"]
