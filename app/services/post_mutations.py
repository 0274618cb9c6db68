from __future__ import annotations

import uuid

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.post import POST_STATUSES, Post
from app.schemas.mutations import PostCreate, PostsBulkUpdate


def get_post_or_404(db: Session, post_id: uuid.UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


def create_post(db: Session, payload: PostCreate) -> Post:
    status = payload.status if payload.status in POST_STATUSES else "todo"
    post = Post(title=payload.title, author=payload.author, status=status, nb_comments=payload.nb_comments or 0)
    db.add(post)
    db.flush()
    if settings.DEMO_CONSTANT_ROW_COUNT:
        oldest = (
            db.query(Post)
            .filter(Post.id != post.id)
            .order_by(Post.created_at.asc(), Post.id.asc())
            .first()
        )
        if oldest is not None:
            db.delete(oldest)
    db.commit()
    db.refresh(post)
    return post


def update_posts(db: Session, payload: PostsBulkUpdate) -> int:
    values = payload.model_dump(exclude_none=True, exclude={"ids"})
    if not values:
        return 0
    try:
        updated = db.query(Post).filter(Post.id.in_(payload.ids)).update(values, synchronize_session=False)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Post violates a value constraint")
    return int(updated or 0)


def delete_posts(db: Session, ids: list[uuid.UUID]) -> int:
    deleted = db.query(Post).filter(Post.id.in_(ids)).delete(synchronize_session="fetch")
    db.commit()
    return int(deleted or 0)
