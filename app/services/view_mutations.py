from __future__ import annotations

import uuid

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.view import View
from app.schemas.mutations import ViewCreate, ViewEdit


def view_to_dict(view: View) -> dict:
    return {
        "id": str(view.id),
        "name": view.name,
        "columns": view.columns,
        "filterParams": view.filter_params,
    }


def _filter_params_json(payload: ViewCreate) -> dict | None:
    if payload.filter_params is None:
        return None
    return payload.filter_params.model_dump(by_alias=True, exclude_none=True)


def _commit_or_409(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A view with this name already exists")


def list_views(db: Session) -> list[View]:
    return db.query(View).order_by(View.created_at.desc(), View.id.desc()).all()


def create_view(db: Session, payload: ViewCreate) -> View:
    view = View(name=payload.name, columns=payload.columns, filter_params=_filter_params_json(payload))
    db.add(view)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A view with this name already exists")
    # Only the newest views are kept; the oldest other one makes room.
    if db.query(View).count() > settings.VIEWS_LIMIT:
        oldest = (
            db.query(View)
            .filter(View.id != view.id)
            .order_by(View.created_at.asc(), View.id.asc())
            .first()
        )
        if oldest is not None:
            db.delete(oldest)
    _commit_or_409(db)
    db.refresh(view)
    return view


def _view_or_404(db: Session, view_id: uuid.UUID) -> View:
    view = db.get(View, view_id)
    if view is None:
        raise HTTPException(status_code=404, detail="View not found")
    return view


def edit_view(db: Session, view_id: uuid.UUID, payload: ViewEdit) -> View:
    view = _view_or_404(db, view_id)
    view.name = payload.name
    view.columns = payload.columns
    view.filter_params = _filter_params_json(payload)
    _commit_or_409(db)
    db.refresh(view)
    return view


def delete_view(db: Session, view_id: uuid.UUID) -> None:
    view = _view_or_404(db, view_id)
    db.delete(view)
    db.commit()
