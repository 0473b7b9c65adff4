"""
Entity configuration: the structure and properties of every record type the
panel manages. Tables, forms and sort menus are generated from these
definitions only.
"""
from typing import Dict, List

from exceptions import UnknownEntity
from models.entity_schema import EntityDefinition, FieldDescriptor, FieldType


def _id_field() -> FieldDescriptor:
    return FieldDescriptor(key="id", label="ID", editable=False)


def _text(key: str, label: str, **kwargs) -> FieldDescriptor:
    kwargs.setdefault("required", True)
    return FieldDescriptor(key=key, label=label, **kwargs)


ENTITIES: Dict[str, EntityDefinition] = {
    definition.name: definition
    for definition in [
        EntityDefinition(
            name="students",
            title="Students",
            subtitle="Manage student records and information",
            fields=[
                _id_field(),
                _text("firstName", "First Name"),
                _text("lastName", "Last Name"),
                _text("email", "Email", data_type=FieldType.EMAIL),
                _text("enrollmentDate", "Enrollment Date", data_type=FieldType.DATE),
                _text("major", "Major"),
                FieldDescriptor(key="gpa", label="GPA", data_type=FieldType.NUMBER, min=0, max=4, step=0.01),
            ],
        ),
        EntityDefinition(
            name="courses",
            title="Courses",
            subtitle="Manage course catalog and schedules",
            fields=[
                _id_field(),
                _text("courseCode", "Course Code"),
                _text("courseName", "Course Name"),
                _text("credits", "Credits", data_type=FieldType.NUMBER, min=1, max=6),
                _text("department", "Department"),
                _text("semester", "Semester", data_type=FieldType.SELECT, options=["Fall", "Spring", "Summer"]),
                FieldDescriptor(key="description", label="Description", data_type=FieldType.TEXTAREA, sortable=False),
            ],
        ),
        EntityDefinition(
            name="instructors",
            title="Instructors",
            subtitle="Manage faculty and teaching staff",
            fields=[
                _id_field(),
                _text("firstName", "First Name"),
                _text("lastName", "Last Name"),
                _text("email", "Email", data_type=FieldType.EMAIL),
                _text("department", "Department"),
                _text(
                    "title",
                    "Title",
                    data_type=FieldType.SELECT,
                    options=[
                        "Professor",
                        "Associate Professor",
                        "Assistant Professor",
                        "Lecturer",
                        "Teaching Assistant",
                    ],
                ),
                FieldDescriptor(key="officeNumber", label="Office Number", sortable=False),
                FieldDescriptor(key="phone", label="Phone", data_type=FieldType.TEL, show_in_table=False, sortable=False),
            ],
        ),
        EntityDefinition(
            name="employees",
            title="Employees",
            subtitle="Manage administrative and support staff",
            fields=[
                _id_field(),
                _text("firstName", "First Name"),
                _text("lastName", "Last Name"),
                _text("email", "Email", data_type=FieldType.EMAIL),
                _text("position", "Position"),
                _text("department", "Department"),
                _text("hireDate", "Hire Date", data_type=FieldType.DATE),
                FieldDescriptor(key="phone", label="Phone", data_type=FieldType.TEL, show_in_table=False, sortable=False),
            ],
        ),
    ]
}


def supported_entities() -> List[str]:
    """Entity names in navigation order; the first one is shown on startup."""
    return list(ENTITIES)


def entity_definition(entity: str) -> EntityDefinition:
    try:
        return ENTITIES[entity]
    except KeyError:
        raise UnknownEntity(entity) from None


def fields_for(entity: str) -> List[FieldDescriptor]:
    return list(entity_definition(entity).fields)
