from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.mutations import IdsPayload, PostCreate, PostsBulkUpdate
from app.schemas.table import ResultEnvelope
from app.services.post_mutations import create_post, delete_posts, get_post_or_404, update_posts
from app.services.table_query import TableQueryService
from app.services.table_resources import POSTS, post_to_dict

router = APIRouter()
posts_table = TableQueryService(POSTS)


@router.get("", response_model=ResultEnvelope)
def get_posts(request: Request, db: Session = Depends(get_db)):
    return posts_table.get(db, request.query_params)


@router.post("", status_code=201)
def post_post(payload: PostCreate, db: Session = Depends(get_db)):
    return post_to_dict(create_post(db, payload))


@router.patch("")
def patch_posts(payload: PostsBulkUpdate, db: Session = Depends(get_db)):
    return {"updated": update_posts(db, payload)}


@router.post("/delete")
def post_delete_posts(payload: IdsPayload, db: Session = Depends(get_db)):
    return {"deleted": delete_posts(db, payload.ids)}


@router.get("/{id}")
def get_post(id: UUID, db: Session = Depends(get_db)):
    return post_to_dict(get_post_or_404(db, id))
