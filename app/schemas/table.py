from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PER_PAGE = 100

MatchMode = Literal["exact", "contains"]
SortOrder = Literal["asc", "desc"]
Operator = Literal["and", "or"]


class TableSearchParams(BaseModel):
    """Query-string parameters exactly as the table UI sends them."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: Any = None
    per_page: Any = None
    sort: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    operator: Optional[str] = None
    view_id: Optional[str] = Field(default=None, alias="viewId")

    @field_validator("sort", "title", "status", "priority", "from_", "to", "operator", "view_id", mode="before")
    @classmethod
    def _scalar_to_str(cls, v):
        # Plain mappings may carry numbers or booleans; anything non-scalar is dropped.
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float, date)):
            return str(v)
        return None


class FilterClause(BaseModel):
    column: str
    value: Optional[str] = None
    match_mode: MatchMode = "exact"
    is_enumerated: bool = False


class QuerySpec(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1, le=MAX_PER_PAGE)
    sort_column: Optional[str] = None
    sort_order: SortOrder = "desc"
    filters: List[FilterClause] = []
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    operator: Operator = "and"


class ResultEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[dict] = []
    page_count: int = Field(default=0, ge=0, alias="pageCount")
