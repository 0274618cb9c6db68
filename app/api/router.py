from fastapi import APIRouter
from app.api import posts, tasks, views

router = APIRouter()
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(posts.router, prefix="/posts", tags=["Posts"])
router.include_router(views.router, prefix="/views", tags=["Views"])
