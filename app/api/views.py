from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.mutations import ViewCreate, ViewEdit
from app.services.view_mutations import create_view, delete_view, edit_view, list_views, view_to_dict

router = APIRouter()


@router.get("")
def get_views(db: Session = Depends(get_db)):
    return [view_to_dict(v) for v in list_views(db)]


@router.post("", status_code=201)
def post_view(payload: ViewCreate, db: Session = Depends(get_db)):
    return view_to_dict(create_view(db, payload))


@router.put("/{id}")
def put_view(id: UUID, payload: ViewEdit, db: Session = Depends(get_db)):
    return view_to_dict(edit_view(db, id, payload))


@router.delete("/{id}")
def remove_view(id: UUID, db: Session = Depends(get_db)):
    delete_view(db, id)
    return {"status": "deleted"}
