"""Row sources consumed by the paginators.

A row source runs a ``QueryArgs`` against some storage and returns rows. The
paginators depend only on the two protocols below, so tests can use an
in-memory list and the API uses ``SQLAlchemyRowSource``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import load_only, selectinload
from sqlalchemy.sql.elements import ColumnElement

from book_service.core.database.exceptions import InvalidFilterError
from book_service.core.pagination.query import And, Comparison, Or, QueryArgs
from book_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.orm import InstrumentedAttribute

_lazy = get_lazy_logger(__name__)


@runtime_checkable
class RowSource(Protocol):
    """Anything that can fetch one page of rows."""

    async def fetch_page(self, args: QueryArgs) -> Sequence[Any]: ...


@runtime_checkable
class CountingRowSource(RowSource, Protocol):
    """Row source that can also count rows matching a filter."""

    async def count(self, args: QueryArgs) -> int: ...


class SQLAlchemyRowSource[T]:
    """Compile ``QueryArgs`` into SQLAlchemy statements for one model.

    Each call opens its own session from ``session_factory``: an
    ``AsyncSession`` cannot run two statements at once, and the offset
    paginator issues fetch and count concurrently.

    Example:
        source = SQLAlchemyRowSource(Book, AsyncSessionLocal, base_options=[
            selectinload(Book.genre),
        ])
        rows = await source.fetch_page(QueryArgs(take=10, order_by=(("title", "asc"),)))
    """

    __slots__ = ("model", "_session_factory", "_base_options")

    def __init__(
        self,
        model: type[T],
        session_factory: async_sessionmaker[AsyncSession],
        *,
        base_options: Iterable[Any] = (),
    ) -> None:
        self.model = model
        self._session_factory = session_factory
        self._base_options = tuple(base_options)

    async def fetch_page(self, args: QueryArgs) -> Sequence[T]:
        stmt = self.build_select(args)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        _lazy.debug(
            lambda: f"source.fetch_page: {self.model.__name__}(skip={args.skip}, take={args.take}) -> {len(rows)} rows"
        )
        return rows

    async def count(self, args: QueryArgs) -> int:
        stmt = select(func.count()).select_from(self.model)
        where = self.compile_where(args.where)
        if where is not None:
            stmt = stmt.where(where)
        async with self._session_factory() as session:
            total = (await session.execute(stmt)).scalar_one()
        _lazy.debug(lambda: f"source.count: {self.model.__name__} -> {total}")
        return total

    def build_select(self, args: QueryArgs) -> Select[tuple[T]]:
        """Build the SELECT for a page without executing it.

        ``args.extra`` becomes the statement's execution options.
        """
        stmt = select(self.model)
        where = self.compile_where(args.where)
        if where is not None:
            stmt = stmt.where(where)
        for name, direction in args.order_by or ():
            column = self._column(name)
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        if args.skip:
            stmt = stmt.offset(args.skip)
        if args.take is not None:
            stmt = stmt.limit(args.take)

        options: list[Any] = list(self._base_options)
        if args.select:
            options.append(load_only(*(self._column(name) for name in args.select)))
        for name in args.include or ():
            relationship = getattr(self.model, name, None)
            if relationship is None:
                raise InvalidFilterError(
                    f"{self.model.__name__} has no relationship {name!r}", filter_name=name
                )
            options.append(selectinload(relationship))
        if options:
            stmt = stmt.options(*options)
        if args.extra:
            stmt = stmt.execution_options(**args.extra)
        return stmt

    def compile_where(self, clause: Any) -> ColumnElement[bool] | None:
        """Translate filter nodes into SQL; native expressions pass through."""
        if clause is None:
            return None
        if isinstance(clause, Comparison):
            column = self._column(clause.field)
            match clause.op:
                case "eq":
                    return column == clause.value
                case "lt":
                    return column < clause.value
                case "gt":
                    return column > clause.value
            raise InvalidFilterError(f"Unsupported operator {clause.op!r}", filter_name=clause.field)
        if isinstance(clause, And):
            return and_(*(self._compile_required(c) for c in clause.clauses))
        if isinstance(clause, Or):
            return or_(*(self._compile_required(c) for c in clause.clauses))
        if isinstance(clause, ColumnElement):
            return clause
        raise InvalidFilterError(f"Unsupported filter clause {type(clause).__name__}")

    def _compile_required(self, clause: Any) -> ColumnElement[bool]:
        compiled = self.compile_where(clause)
        if compiled is None:
            raise InvalidFilterError("Empty clause inside a compound filter")
        return compiled

    def _column(self, name: str) -> InstrumentedAttribute[Any]:
        if name not in self.model.__mapper__.columns:  # type: ignore[attr-defined]
            raise InvalidFilterError(
                f"{self.model.__name__} has no column {name!r}", filter_name=name
            )
        return getattr(self.model, name)


__all__ = ["CountingRowSource", "RowSource", "SQLAlchemyRowSource"]
