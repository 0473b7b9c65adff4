from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

Record = Dict[str, Any]

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

class ModalMode(str, Enum):
    ADD = "add"
    EDIT = "edit"

class QueryState(BaseModel):
    """Pagination, search and sort parameters driving the next list request."""
    entity: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    search_text: str = ""
    sort_field: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC

    def to_params(self) -> Dict[str, Any]:
        """Maps the state onto json-server query parameters."""
        params: Dict[str, Any] = {"_page": self.page, "_limit": self.page_size}
        if self.search_text:
            params["q"] = self.search_text
        if self.sort_field:
            params["_sort"] = self.sort_field
            params["_order"] = self.sort_order.value
        return params

class ModalState(BaseModel):
    is_open: bool = False
    mode: Optional[ModalMode] = None
    target_id: Optional[str] = None

    @model_validator(mode="after")
    def check_target(self):
        if (self.mode == ModalMode.EDIT) != (self.target_id is not None):
            raise ValueError("target_id is required in edit mode and forbidden otherwise")
        return self

class ListResult(BaseModel):
    records: List[Record]
    total_count: int
