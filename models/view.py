# File: models/view.py
"""
Presentation descriptions produced by the renderers and the view controller.
They describe what to show; materializing them is the browser's job.
"""
from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from models.entity_schema import FieldType, Number
from models.panel_state import ModalMode

# Form widgets

class SelectOption(BaseModel):
    value: str
    text: str
    selected: bool = False

class FormInput(BaseModel):
    name: str
    label: str
    widget: Literal["input", "textarea", "select"]
    input_type: FieldType
    required: bool = False
    value: str = ""
    min: Optional[Number] = None
    max: Optional[Number] = None
    step: Optional[Number] = None
    options: Optional[List[SelectOption]] = None
    autofocus: bool = False

class FormSpec(BaseModel):
    inputs: List[FormInput] = Field(default_factory=list)

# Table

class HeaderCell(BaseModel):
    key: Optional[str] = None # None for the trailing actions column
    label: str
    clickable: bool = False
    sorted: bool = False
    indicator: str = ""

class HeaderSpec(BaseModel):
    columns: List[HeaderCell]

class RowAction(BaseModel):
    action: Literal["edit", "delete"]
    label: str
    record_id: str

class Row(BaseModel):
    record_id: str
    cells: List[str]
    actions: List[RowAction]

    @property
    def cell_count(self) -> int:
        # The actions cell counts as one column
        return len(self.cells) + 1

class RowsSpec(BaseModel):
    kind: Literal["rows"] = "rows"
    rows: List[Row]

class EmptyState(BaseModel):
    kind: Literal["empty"] = "empty"
    colspan: int
    icon: str = "📭"
    title: str = "No records found"
    message: str = "Try adjusting your search or add a new record"

class TableView(BaseModel):
    header: HeaderSpec
    body: Union[RowsSpec, EmptyState] = Field(discriminator="kind")

class SortOption(BaseModel):
    value: str
    text: str

# Panel chrome

class PaginationView(BaseModel):
    page: int
    total_pages: int
    total_count: int
    page_info: str
    previous_disabled: bool
    next_disabled: bool

class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

class Notification(BaseModel):
    message: str
    level: NotificationLevel = NotificationLevel.SUCCESS
    duration_seconds: int = 3

class NavItem(BaseModel):
    entity: str
    title: str
    active: bool = False

class ModalView(BaseModel):
    is_open: bool = False
    mode: Optional[ModalMode] = None
    target_id: Optional[str] = None
    title: str = ""
    form: Optional[FormSpec] = None

class ConfirmationPrompt(BaseModel):
    record_id: str
    message: str = "Are you sure you want to delete this record?"

class PanelView(BaseModel):
    entity: str
    title: str
    subtitle: str
    nav: List[NavItem]
    search_text: str
    sort_options: List[SortOption]
    sort_value: str
    table: Optional[TableView] = None
    pagination: Optional[PaginationView] = None
    modal: ModalView
    loading: bool = False
    confirmation: Optional[ConfirmationPrompt] = None
    notifications: List[Notification] = Field(default_factory=list)

# Events sent by the browser

class EventType(str, Enum):
    SWITCH_ENTITY = "switch_entity"
    SEARCH = "search"
    SORT = "sort"
    HEADER_CLICK = "header_click"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    OPEN_ADD = "open_add"
    OPEN_EDIT = "open_edit"
    SUBMIT = "submit"
    CLOSE_MODAL = "close_modal"
    DELETE = "delete"
    CONFIRM_DELETE = "confirm_delete"
    RELOAD = "reload"

class UIEvent(BaseModel):
    """
    One interaction from the page. `target` identifies the element that was
    acted on (entity name, header key or record id); `value` carries input
    text, the sort selector value, submitted form data or a confirmation answer.
    """
    type: EventType
    target: Optional[str] = None
    value: Any = None
