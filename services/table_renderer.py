from typing import Iterable, List, Optional, Sequence, Union

from models.entity_schema import FieldDescriptor
from models.panel_state import Record, SortOrder
from models.view import (
    EmptyState,
    HeaderCell,
    HeaderSpec,
    Row,
    RowAction,
    RowsSpec,
    SortOption,
    TableView,
)

PLACEHOLDER = "-"
INDICATORS = {SortOrder.ASC: "▲", SortOrder.DESC: "▼"}

def table_fields(fields: Iterable[FieldDescriptor]) -> List[FieldDescriptor]:
    return [field for field in fields if field.show_in_table]

def render_header(fields: Iterable[FieldDescriptor], sort_field: Optional[str], sort_order: SortOrder) -> HeaderSpec:
    columns = []
    for field in table_fields(fields):
        active = field.sortable and field.key == sort_field
        columns.append(HeaderCell(
            key=field.key,
            label=field.label,
            clickable=field.sortable,
            sorted=active,
            indicator=INDICATORS[sort_order] if active else "",
        ))
    columns.append(HeaderCell(label="Actions"))
    return HeaderSpec(columns=columns)

def _cell(value) -> str:
    # Falsy values, zero included, show the placeholder
    if not value:
        return PLACEHOLDER
    return str(value)

def render_rows(fields: Iterable[FieldDescriptor], records: Sequence[Record]) -> Union[RowsSpec, EmptyState]:
    visible = table_fields(fields)
    if not records:
        return EmptyState(colspan=len(visible) + 1)

    rows = []
    for record in records:
        record_id = str(record.get("id", ""))
        rows.append(Row(
            record_id=record_id,
            cells=[_cell(record.get(field.key)) for field in visible],
            actions=[
                RowAction(action="edit", label="Edit", record_id=record_id),
                RowAction(action="delete", label="Delete", record_id=record_id),
            ],
        ))
    return RowsSpec(rows=rows)

def render_table(fields: Sequence[FieldDescriptor], records: Sequence[Record], sort_field: Optional[str], sort_order: SortOrder) -> TableView:
    return TableView(header=render_header(fields, sort_field, sort_order), body=render_rows(fields, records))

def sort_options(fields: Iterable[FieldDescriptor]) -> List[SortOption]:
    """Entries of the sort dropdown: `key:asc` / `key:desc` per sortable field."""
    options = [SortOption(value="", text="Sort by...")]
    for field in fields:
        if field.sortable:
            options.append(SortOption(value=f"{field.key}:asc", text=f"{field.label} (A-Z)"))
            options.append(SortOption(value=f"{field.key}:desc", text=f"{field.label} (Z-A)"))
    return options
