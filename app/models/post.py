from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base
from app.models.common import UUIDMixin, TimestampMixin
from app.models.task import TASK_STATUSES, _in_check

POST_STATUSES = TASK_STATUSES


class Post(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "posts"
    __table_args__ = (CheckConstraint(_in_check("status", POST_STATUSES), name="ck_posts_status"),)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="in-progress")
    author: Mapped[str] = mapped_column(Text, nullable=False)
    nb_comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
