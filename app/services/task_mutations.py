from __future__ import annotations

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.data.sample_rows import new_task_code, random_task_fields
from app.models.task import Task
from app.schemas.mutations import TaskCreate, TaskUpdate, TasksBulkUpdate

_LOG = logging.getLogger("app.table_query")

_CODE_ATTEMPTS = 20


def unique_task_code(db: Session) -> str:
    for _ in range(_CODE_ATTEMPTS):
        code = new_task_code()
        if db.query(Task.id).filter(Task.code == code).first() is None:
            return code
    raise HTTPException(status_code=409, detail="Could not allocate a free task code")


def _evict_oldest_task(db: Session, keep_id: uuid.UUID) -> None:
    oldest = (
        db.query(Task)
        .filter(Task.id != keep_id)
        .order_by(Task.created_at.asc(), Task.id.asc())
        .first()
    )
    if oldest is not None:
        db.delete(oldest)


def _commit_or_409(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Task violates a uniqueness or value constraint")


def create_task(db: Session, payload: TaskCreate) -> Task:
    task = Task(code=unique_task_code(db), **payload.model_dump())
    db.add(task)
    db.flush()
    if settings.DEMO_CONSTANT_ROW_COUNT:
        _evict_oldest_task(db, task.id)
    _commit_or_409(db)
    db.refresh(task)
    return task


def _task_or_404(db: Session, task_id: uuid.UUID) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


def update_task(db: Session, task_id: uuid.UUID, payload: TaskUpdate) -> Task:
    task = _task_or_404(db, task_id)
    for key, value in payload.model_dump(exclude_none=True).items():
        setattr(task, key, value)
    _commit_or_409(db)
    db.refresh(task)
    return task


def update_tasks(db: Session, payload: TasksBulkUpdate) -> int:
    values = payload.model_dump(exclude_none=True, exclude={"ids"})
    if not values:
        return 0
    updated = (
        db.query(Task)
        .filter(Task.id.in_(payload.ids))
        .update(values, synchronize_session=False)
    )
    _commit_or_409(db)
    return int(updated or 0)


def delete_tasks(db: Session, ids: list[uuid.UUID]) -> int:
    deleted = db.query(Task).filter(Task.id.in_(ids)).delete(synchronize_session="fetch")
    if settings.DEMO_CONSTANT_ROW_COUNT:
        for _ in range(int(deleted or 0)):
            fields = random_task_fields()
            fields["code"] = unique_task_code(db)
            db.add(Task(**fields))
    _commit_or_409(db)
    return int(deleted or 0)


def delete_task(db: Session, task_id: uuid.UUID) -> None:
    _task_or_404(db, task_id)
    delete_tasks(db, [task_id])


def _counts_by(db: Session, column, key: str) -> list[dict]:
    try:
        rows = db.query(column, func.count(Task.id)).group_by(column).order_by(column).all()
    except SQLAlchemyError:
        _LOG.exception("task %s counts failed", key)
        db.rollback()
        return []
    return [{key: value, "count": int(count)} for value, count in rows]


def task_counts_by_status(db: Session) -> list[dict]:
    return _counts_by(db, Task.status, "status")


def task_counts_by_priority(db: Session) -> list[dict]:
    return _counts_by(db, Task.priority, "priority")
