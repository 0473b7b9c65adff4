# File: models/entity_schema.py
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

Number = Union[int, float]

class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    DATE = "date"
    NUMBER = "number"
    SELECT = "select"
    TEXTAREA = "textarea"
    TEL = "tel"

class FieldDescriptor(BaseModel):
    """Schema for a single attribute of an entity's records."""
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    data_type: FieldType = FieldType.TEXT
    show_in_table: bool = True
    required: bool = False
    sortable: bool = True
    editable: bool = True
    # Only meaningful for number fields
    min: Optional[Number] = None
    max: Optional[Number] = None
    step: Optional[Number] = None
    # Only meaningful for select fields, kept in display order
    options: Optional[List[str]] = None

class EntityDefinition(BaseModel):
    """Schema for a full entity definition, used for table and form generation."""
    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    subtitle: str = ""
    fields: List[FieldDescriptor]

    @property
    def singular_title(self) -> str:
        return self.title[:-1] if self.title.endswith("s") else self.title

    @model_validator(mode="after")
    def check_fields(self):
        keys = [field.key for field in self.fields]
        duplicates = {key for key in keys if keys.count(key) > 1}
        if duplicates:
            raise ValueError(f"Entity '{self.name}' has duplicate field keys: {sorted(duplicates)}")

        id_fields = [field for field in self.fields if field.key == "id"]
        if len(id_fields) != 1:
            raise ValueError(f"Entity '{self.name}' must declare exactly one 'id' field")
        if id_fields[0].editable:
            raise ValueError(f"Entity '{self.name}' declares an editable 'id' field")
        return self
