from sqlalchemy import JSON, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base
from app.models.common import UUIDMixin, TimestampMixin

class View(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "views"
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    columns: Mapped[list | None] = mapped_column(JSON, nullable=True)
    filter_params: Mapped[dict | None] = mapped_column(JSON, nullable=True)
