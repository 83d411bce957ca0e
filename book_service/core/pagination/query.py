"""Storage-agnostic query arguments.

Paginators never build SQL. They describe a page as a ``QueryArgs`` value and
hand it to a row source, which compiles it for its backend. Only ``where``,
``order_by``, ``skip`` and ``take`` are ever rewritten by a paginator; every
other field is carried through untouched.

Filters are either the small node types below or any native predicate the
row source understands (e.g. a SQLAlchemy column expression). Paginators
treat native predicates as opaque and only ever wrap them in ``And``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Literal

SortOrder = Literal["asc", "desc"]
ComparisonOp = Literal["eq", "lt", "gt"]
OrderBy = tuple[tuple[str, SortOrder], ...]

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class Comparison:
    """``field <op> value`` predicate."""

    field: str
    op: ComparisonOp
    value: Any


@dataclass(frozen=True, slots=True, init=False)
class And:
    """Conjunction of clauses."""

    clauses: tuple[Any, ...]

    def __init__(self, *clauses: Any) -> None:
        object.__setattr__(self, "clauses", tuple(clauses))


@dataclass(frozen=True, slots=True, init=False)
class Or:
    """Disjunction of clauses."""

    clauses: tuple[Any, ...]

    def __init__(self, *clauses: Any) -> None:
        object.__setattr__(self, "clauses", tuple(clauses))


@dataclass(frozen=True, slots=True)
class QueryArgs:
    """Immutable bag of query arguments for a row source.

    Attributes:
        where: Filter clause (node or native predicate), None for no filter
        order_by: ``((field, direction), ...)`` in priority order
        select: Column names to project, None for all
        include: Relationship names to load alongside each row
        skip: Rows to skip (offset)
        take: Maximum rows to return (limit)
        extra: Backend-specific arguments passed through verbatim;
            ``SQLAlchemyRowSource`` applies them as execution options

    Example:
        args = QueryArgs(where=Comparison("author", "eq", "Le Guin"))
        page_args = args.merge(skip=20, take=10, order_by=(("title", "asc"),))
    """

    where: Any = None
    order_by: OrderBy | None = None
    select: Sequence[str] | None = None
    include: Sequence[str] | None = None
    skip: int | None = None
    take: int | None = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def merge(
        self,
        *,
        where: Any = _UNSET,
        order_by: OrderBy | None = _UNSET,
        skip: int | None = _UNSET,
        take: int | None = _UNSET,
    ) -> QueryArgs:
        """Return a copy with the given paging fields replaced."""
        changes: dict[str, Any] = {}
        if where is not _UNSET:
            changes["where"] = where
        if order_by is not _UNSET:
            changes["order_by"] = order_by
        if skip is not _UNSET:
            changes["skip"] = skip
        if take is not _UNSET:
            changes["take"] = take
        return replace(self, **changes)

    def filter_only(self) -> QueryArgs:
        """Return arguments carrying only the filter, as used for counting."""
        return QueryArgs(where=self.where)


def combine_where(where: Any, clause: Any) -> Any:
    """AND ``clause`` onto an optional caller filter without inspecting it."""
    if where is None:
        return clause
    return And(where, clause)


__all__ = [
    "And",
    "Comparison",
    "ComparisonOp",
    "OrderBy",
    "Or",
    "QueryArgs",
    "SortOrder",
    "combine_where",
]
