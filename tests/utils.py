"""Test utilities and helper functions.

Usage:
    from tests.utils import InMemoryRowSource

    source = InMemoryRowSource([{"id": "a", "created_at": 1}, ...])
    page = await OffsetPaginator().paginate(source, QueryArgs(), PageRequest(limit=2))
    assert source.fetch_calls[0].skip == 0
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from typing import Any

from book_service.core.pagination.query import And, Comparison, Or, QueryArgs

# ============================================================================
# Row sources
# ============================================================================


class InMemoryRowSource:
    """Row source over a list of dicts that records every call.

    Filters understand the three node types plus plain callables, which
    stand in for native predicates a real backend would compile.

    Attributes:
        fetch_calls: Arguments of each ``fetch_page`` call, in order
        count_calls: Arguments of each ``count`` call, in order
        started: ``(name, perf_counter())`` for each call as it begins
    """

    def __init__(
        self,
        rows: Sequence[dict[str, Any]],
        *,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.rows = list(rows)
        self.delay = delay
        self.error = error
        self.fetch_calls: list[QueryArgs] = []
        self.count_calls: list[QueryArgs] = []
        self.started: list[tuple[str, float]] = []

    async def fetch_page(self, args: QueryArgs) -> list[dict[str, Any]]:
        self.started.append(("fetch_page", time.perf_counter()))
        self.fetch_calls.append(args)
        await self._pause()
        rows = [row for row in self.rows if matches(row, args.where)]
        for name, direction in reversed(args.order_by or ()):
            rows.sort(key=lambda row, name=name: row[name], reverse=direction == "desc")
        start = args.skip or 0
        end = None if args.take is None else start + args.take
        return rows[start:end]

    async def count(self, args: QueryArgs) -> int:
        self.started.append(("count", time.perf_counter()))
        self.count_calls.append(args)
        await self._pause()
        return sum(1 for row in self.rows if matches(row, args.where))

    async def _pause(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error


def matches(row: dict[str, Any], clause: Any) -> bool:
    """Evaluate a filter clause against one row."""
    if clause is None:
        return True
    if isinstance(clause, Comparison):
        value = row[clause.field]
        if clause.op == "eq":
            return value == clause.value
        if clause.op == "lt":
            return value < clause.value
        return value > clause.value
    if isinstance(clause, And):
        return all(matches(row, c) for c in clause.clauses)
    if isinstance(clause, Or):
        return any(matches(row, c) for c in clause.clauses)
    if callable(clause):
        return bool(clause(row))
    raise TypeError(f"Unsupported clause {clause!r}")


def make_rows(count: int, *, sort_field: str = "created_at") -> list[dict[str, Any]]:
    """Rows with ids ``r00``, ``r01``... and ascending integer sort values."""
    return [{"id": f"r{i:02d}", sort_field: i, "title": f"Title {i}"} for i in range(count)]
