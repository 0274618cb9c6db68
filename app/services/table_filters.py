"""Predicates for table filtering.

A predicate is one of four variants: ``NoConstraint`` (nothing to filter
on), ``Clause`` (one SQL boolean expression), ``And`` and ``Or``. The
variants are combined freely and turned into a SQLAlchemy expression only
at the very end with :func:`to_expression`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Union

from sqlalchemy import and_, or_
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from app.schemas.table import FilterClause

MULTI_VALUE_SEPARATOR = "."


@dataclass(frozen=True)
class NoConstraint:
    pass


NO_CONSTRAINT = NoConstraint()


@dataclass(frozen=True, eq=False)
class Clause:
    expression: ColumnElement


@dataclass(frozen=True)
class And:
    parts: tuple


@dataclass(frozen=True)
class Or:
    parts: tuple


Predicate = Union[NoConstraint, Clause, And, Or]


def resolve_column(model, column_name: str) -> InstrumentedAttribute:
    attr = getattr(model, str(column_name or ""), None)
    if not isinstance(attr, InstrumentedAttribute) or not hasattr(attr.property, "columns"):
        raise ValueError(f"{getattr(model, '__name__', model)!r} has no column {column_name!r}")
    return attr


def build_filter(model, clause: FilterClause) -> Predicate:
    col = resolve_column(model, clause.column)
    value = clause.value
    if value is None or not str(value).strip():
        return NO_CONSTRAINT
    if clause.is_enumerated:
        # Enumerated values are not checked here; an unknown value simply matches nothing.
        values = [v for v in str(value).split(MULTI_VALUE_SEPARATOR) if v]
        if not values:
            # Only separators: the literal equality matches no rows.
            return Clause(col == str(value))
        if len(values) == 1:
            return Clause(col == values[0])
        return Clause(col.in_(values))
    if clause.match_mode == "contains":
        # LIKE wildcards in user input match literally.
        return Clause(col.contains(str(value), autoescape=True))
    return Clause(col == value)


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def date_range_filter(col, date_from: date | None, date_to: date | None) -> Predicate:
    # Half-open input (only one bound) is not a range.
    if date_from is None or date_to is None:
        return NO_CONSTRAINT
    return Clause((col >= _day_start(date_from)) & (col < _day_start(date_to + timedelta(days=1))))


def _flatten(predicates: Iterable[Predicate]) -> tuple:
    return tuple(p for p in predicates if not isinstance(p, NoConstraint))


def compose(
    model,
    clauses: Iterable[FilterClause],
    date_from: date | None = None,
    date_to: date | None = None,
    operator: str | None = "and",
    date_column: str = "created_at",
) -> Predicate:
    parts = [build_filter(model, c) for c in clauses]
    parts.append(date_range_filter(resolve_column(model, date_column), date_from, date_to))
    remaining = _flatten(parts)
    if not remaining:
        return NO_CONSTRAINT
    if len(remaining) == 1:
        return remaining[0]
    if operator == "or":
        return Or(remaining)
    return And(remaining)


def to_expression(predicate: Predicate) -> ColumnElement | None:
    """Render a predicate; ``None`` means the query is unrestricted."""
    if isinstance(predicate, NoConstraint):
        return None
    if isinstance(predicate, Clause):
        return predicate.expression
    rendered = [e for e in (to_expression(p) for p in predicate.parts) if e is not None]
    if not rendered:
        return None
    if len(rendered) == 1:
        return rendered[0]
    if isinstance(predicate, Or):
        return or_(*rendered)
    return and_(*rendered)
