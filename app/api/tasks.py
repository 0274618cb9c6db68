from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.mutations import IdsPayload, TaskCreate, TaskUpdate, TasksBulkUpdate
from app.schemas.table import ResultEnvelope
from app.services.table_query import TableQueryService
from app.services.table_resources import TASKS, task_to_dict
from app.services.task_mutations import (
    create_task,
    delete_task,
    delete_tasks,
    task_counts_by_priority,
    task_counts_by_status,
    update_task,
    update_tasks,
)

router = APIRouter()
tasks_table = TableQueryService(TASKS)


@router.get("", response_model=ResultEnvelope)
def get_tasks(request: Request, db: Session = Depends(get_db)):
    return tasks_table.get(db, request.query_params)


@router.get("/counts/status")
def get_task_counts_by_status(db: Session = Depends(get_db)):
    return task_counts_by_status(db)


@router.get("/counts/priority")
def get_task_counts_by_priority(db: Session = Depends(get_db)):
    return task_counts_by_priority(db)


@router.post("", status_code=201)
def post_task(payload: TaskCreate, db: Session = Depends(get_db)):
    return task_to_dict(create_task(db, payload))


@router.patch("")
def patch_tasks(payload: TasksBulkUpdate, db: Session = Depends(get_db)):
    return {"updated": update_tasks(db, payload)}


@router.post("/delete")
def post_delete_tasks(payload: IdsPayload, db: Session = Depends(get_db)):
    return {"deleted": delete_tasks(db, payload.ids)}


@router.patch("/{id}")
def patch_task(id: UUID, payload: TaskUpdate, db: Session = Depends(get_db)):
    return task_to_dict(update_task(db, id, payload))


@router.delete("/{id}")
def remove_task(id: UUID, db: Session = Depends(get_db)):
    delete_task(db, id)
    return {"status": "deleted"}
