from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.view import View
from app.schemas.table import MAX_PER_PAGE, FilterClause, QuerySpec, ResultEnvelope, TableSearchParams
from app.services.table_filters import MULTI_VALUE_SEPARATOR, Predicate, compose, resolve_column, to_expression
from app.services.table_resources import TableResource

_LOG = logging.getLogger("app.table_query")


class TableQueryError(Exception):
    """Row fetch or count failed in the data store."""


@dataclass
class PageResult:
    # Rows are serialized before the read scope closes and expires the instances.
    rows: list[dict]
    total: int


def _ordering(resource: TableResource, sort_column: str | None, sort_order: str) -> list:
    name = resource.sort_column_name(sort_column)
    if name is None:
        name, sort_order = resource.default_sort_column, "desc"
    col = resolve_column(resource.model, name)
    pk = resolve_column(resource.model, "id")
    direction = asc if sort_order == "asc" else desc
    ordering = [direction(col)]
    if col is not pk:
        # Tiebreaker keeps page boundaries stable for duplicate sort keys.
        ordering.append(direction(pk))
    return ordering


def _fetch_page(db: Session, resource: TableResource, where, ordering: list, offset: int, limit: int) -> PageResult:
    q = db.query(resource.model)
    if where is not None:
        q = q.filter(where)
    total = int(q.count() or 0)
    if offset >= total:
        # Past the last row; the offset may not even fit the database's integer type.
        return PageResult(rows=[], total=total)
    rows = [resource.serialize(row) for row in q.order_by(*ordering).offset(offset).limit(limit).all()]
    return PageResult(rows=rows, total=total)


def execute_page(
    db: Session,
    resource: TableResource,
    predicate: Predicate,
    sort_column: str | None,
    sort_order: str,
    page: int,
    per_page: int,
    *,
    isolation_level: str | None = None,
) -> PageResult:
    page = max(int(page or 1), 1)
    offset = (page - 1) * per_page
    where = to_expression(predicate)
    ordering = _ordering(resource, sort_column, sort_order)
    try:
        if db.in_transaction():
            # Caller already holds a transaction; both queries run inside it.
            return _fetch_page(db, resource, where, ordering, offset, per_page)
        with db.begin():
            if isolation_level:
                db.connection(execution_options={"isolation_level": isolation_level})
            return _fetch_page(db, resource, where, ordering, offset, per_page)
    except SQLAlchemyError as exc:
        raise TableQueryError(f"{resource.name}: {exc.__class__.__name__}") from exc


def _parse_int(raw) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw or "").strip()
    try:
        return int(text)
    except ValueError:
        return None


def _parse_date(raw) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw or "").strip()
    if not text:
        return None
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


def parse_sort(raw: str | None) -> tuple[str | None, str]:
    """Split ``"<column>.<asc|desc>"``; anything else means the default sort."""
    parts = str(raw or "").split(".")
    if len(parts) != 2 or not parts[0] or parts[1] not in {"asc", "desc"}:
        return None, "desc"
    return parts[0], parts[1]


def _permitted_value(raw: str, allowed: tuple[str, ...]) -> str:
    values = [v for v in raw.split(MULTI_VALUE_SEPARATOR) if v]
    known = [v for v in values if v in allowed]
    if not known:
        # Nothing permitted: keep the literal so the equality matches no rows.
        return raw
    return MULTI_VALUE_SEPARATOR.join(known)


def _apply_saved_view(db: Session, params: TableSearchParams) -> TableSearchParams:
    try:
        view_id = uuid.UUID(str(params.view_id or "").strip())
    except ValueError:
        return params
    view = db.get(View, view_id)
    if view is None or not isinstance(view.filter_params, dict):
        return params
    merged = params.model_dump(by_alias=False)
    saved = view.filter_params
    if not merged.get("operator") and saved.get("operator"):
        merged["operator"] = saved["operator"]
    if not merged.get("sort") and saved.get("sort"):
        merged["sort"] = saved["sort"]
    for item in saved.get("filters") or []:
        field = str((item or {}).get("field") or "")
        if field in {"title", "status", "priority"} and not merged.get(field):
            merged[field] = str(item.get("value") or "")
    return TableSearchParams.model_validate(merged)


class TableQueryService:
    def __init__(self, resource: TableResource, *, default_per_page: int | None = None, isolation_level: str | None = None):
        self.resource = resource
        self.default_per_page = default_per_page or settings.TABLE_DEFAULT_PER_PAGE
        self.isolation_level = isolation_level if isolation_level is not None else settings.TABLE_READ_ISOLATION_LEVEL

    def normalize(self, params: TableSearchParams) -> QuerySpec:
        page = _parse_int(params.page)
        if page is None or page < 1:
            page = 1
        per_page = _parse_int(params.per_page)
        if per_page is None or per_page < 1:
            per_page = self.default_per_page
        per_page = min(per_page, MAX_PER_PAGE)

        sort_column, sort_order = parse_sort(params.sort)
        if self.resource.sort_column_name(sort_column) is None:
            sort_column, sort_order = None, "desc"

        raw_values = params.model_dump(by_alias=False)
        filters = []
        for f in self.resource.filter_fields:
            value = str(raw_values.get(f.param) or "").strip()
            if value and f.is_enumerated:
                value = _permitted_value(value, f.allowed)
            filters.append(
                FilterClause(column=f.column, value=value, match_mode=f.match_mode, is_enumerated=f.is_enumerated)
            )

        operator = str(params.operator or "").strip().lower()
        return QuerySpec(
            page=page,
            per_page=per_page,
            sort_column=sort_column,
            sort_order=sort_order,
            filters=filters,
            date_from=_parse_date(params.from_),
            date_to=_parse_date(params.to),
            operator=operator if operator in {"and", "or"} else "and",
        )

    def get(self, db: Session, raw: TableSearchParams | Mapping[str, Any]) -> ResultEnvelope:
        try:
            params = raw if isinstance(raw, TableSearchParams) else TableSearchParams.model_validate(dict(raw or {}))
            if params.view_id:
                params = _apply_saved_view(db, params)
            spec = self.normalize(params)
            predicate = compose(
                self.resource.model,
                spec.filters,
                spec.date_from,
                spec.date_to,
                spec.operator,
                date_column=self.resource.date_column,
            )
            result = execute_page(
                db,
                self.resource,
                predicate,
                spec.sort_column,
                spec.sort_order,
                spec.page,
                spec.per_page,
                isolation_level=self.isolation_level or None,
            )
        except Exception:
            _LOG.exception("table query failed resource=%s", self.resource.name)
            return ResultEnvelope(data=[], page_count=0)
        return ResultEnvelope(
            data=result.rows,
            page_count=math.ceil(result.total / spec.per_page),
        )
