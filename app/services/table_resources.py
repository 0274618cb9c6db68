from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from app.models.post import POST_STATUSES, Post
from app.models.task import TASK_PRIORITIES, TASK_STATUSES, Task


@dataclass(frozen=True)
class FilterField:
    param: str
    column: str
    match_mode: str = "exact"
    allowed: tuple[str, ...] | None = None

    @property
    def is_enumerated(self) -> bool:
        return self.allowed is not None


@dataclass(frozen=True)
class TableResource:
    name: str
    model: Any
    filter_fields: tuple[FilterField, ...]
    sortable: tuple[str, ...]
    serialize: Callable[[Any], dict]
    sort_aliases: dict[str, str] = field(default_factory=dict)
    default_sort_column: str = "created_at"
    date_column: str = "created_at"

    def sort_column_name(self, raw: str | None) -> str | None:
        name = self.sort_aliases.get(str(raw or ""), str(raw or ""))
        return name if name in self.sortable else None


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def task_to_dict(row: Task) -> dict:
    return {
        "id": str(row.id),
        "code": row.code,
        "title": row.title,
        "status": row.status,
        "label": row.label,
        "priority": row.priority,
        "created_at": _iso(row.created_at),
        "updated_at": _iso(row.updated_at),
    }


def post_to_dict(row: Post) -> dict:
    return {
        "id": str(row.id),
        "title": row.title,
        "status": row.status,
        "author": row.author,
        "nb_comments": row.nb_comments,
        "created_at": _iso(row.created_at),
        "updated_at": _iso(row.updated_at),
    }


_CAMEL_ALIASES = {"createdAt": "created_at", "updatedAt": "updated_at", "nbComments": "nb_comments"}

TASKS = TableResource(
    name="tasks",
    model=Task,
    filter_fields=(
        FilterField("title", "title", match_mode="contains"),
        FilterField("status", "status", allowed=TASK_STATUSES),
        FilterField("priority", "priority", allowed=TASK_PRIORITIES),
    ),
    sortable=("id", "code", "title", "status", "label", "priority", "created_at", "updated_at"),
    serialize=task_to_dict,
    sort_aliases=_CAMEL_ALIASES,
)

POSTS = TableResource(
    name="posts",
    model=Post,
    filter_fields=(
        FilterField("title", "title", match_mode="contains"),
        FilterField("status", "status", allowed=POST_STATUSES),
    ),
    sortable=("id", "title", "status", "author", "nb_comments", "created_at", "updated_at"),
    serialize=post_to_dict,
    sort_aliases=_CAMEL_ALIASES,
)
