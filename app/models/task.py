from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base
from app.models.common import UUIDMixin, TimestampMixin

TASK_STATUSES = ("todo", "in-progress", "done", "canceled")
TASK_LABELS = ("bug", "feature", "enhancement", "documentation")
TASK_PRIORITIES = ("low", "medium", "high")


def _in_check(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Task(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(_in_check("status", TASK_STATUSES), name="ck_tasks_status"),
        CheckConstraint(_in_check("label", TASK_LABELS), name="ck_tasks_label"),
        CheckConstraint(_in_check("priority", TASK_PRIORITIES), name="ck_tasks_priority"),
    )
    code: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    title: Mapped[str | None] = mapped_column(String(256), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="todo")
    label: Mapped[str] = mapped_column(String(32), nullable=False, default="bug")
    priority: Mapped[str] = mapped_column(String(32), nullable=False, default="low")
