from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["todo", "in-progress", "done", "canceled"]
TaskLabel = Literal["bug", "feature", "enhancement", "documentation"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    title: str = Field(max_length=256)
    label: TaskLabel
    status: TaskStatus
    priority: TaskPriority


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=256)
    label: Optional[TaskLabel] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None


class TasksBulkUpdate(BaseModel):
    ids: List[UUID] = Field(min_length=1)
    label: Optional[TaskLabel] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None


class IdsPayload(BaseModel):
    ids: List[UUID] = Field(min_length=1)


class PostCreate(BaseModel):
    title: str = Field(max_length=256)
    status: str = Field(default="todo", max_length=256)
    author: str = Field(max_length=256)
    nb_comments: int = 0


class PostsBulkUpdate(BaseModel):
    ids: List[UUID] = Field(min_length=1)
    title: Optional[str] = Field(default=None, max_length=256)
    status: Optional[TaskStatus] = None


class ViewFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: Literal["title", "status", "priority"]
    value: str
    is_multi: bool = Field(default=False, alias="isMulti")


class ViewFilterParams(BaseModel):
    operator: Optional[Literal["and", "or"]] = None
    sort: Optional[str] = None
    filters: Optional[List[ViewFilter]] = None


class ViewCreate(BaseModel):
    name: str = Field(min_length=1)
    columns: Optional[List[str]] = None
    filter_params: Optional[ViewFilterParams] = Field(default=None, alias="filterParams")

    model_config = ConfigDict(populate_by_name=True)


class ViewEdit(ViewCreate):
    pass
