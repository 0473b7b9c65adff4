import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from models.entity_schema import FieldDescriptor, FieldType
from models.panel_state import Record
from models.view import FormInput, FormSpec, SelectOption

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)

def _is_email(text: str) -> bool:
    try:
        address = _email_adapter.validate_python(text)
    except ValidationError:
        return False
    # EmailStr also takes "Name <address>", an email input only a bare address
    return address.lower() == text.lower()

def _prefill(record: Optional[Record], key: str) -> str:
    if not record:
        return ""
    value = record.get(key)
    if value is None or value == "":
        return ""
    return str(value)

def _widget_for(field: FieldDescriptor) -> str:
    if field.data_type == FieldType.TEXTAREA:
        return "textarea"
    if field.data_type == FieldType.SELECT:
        return "select"
    return "input"

def render_form(fields: Iterable[FieldDescriptor], existing_record: Optional[Record] = None) -> FormSpec:
    """
    Builds the add/edit form for an entity. The id field and non-editable
    fields never get a widget; values come from `existing_record` when given.
    """
    inputs: List[FormInput] = []
    for field in fields:
        if field.key == "id" or not field.editable:
            continue

        form_input = FormInput(
            name=field.key,
            label=f"{field.label} *" if field.required else field.label,
            widget=_widget_for(field),
            input_type=field.data_type,
            required=field.required,
            autofocus=not inputs,
        )

        if field.data_type == FieldType.SELECT:
            current = existing_record.get(field.key) if existing_record else None
            options = [SelectOption(value="", text=f"Select {field.label}")]
            for choice in field.options or []:
                options.append(SelectOption(value=choice, text=choice, selected=current == choice))
            form_input.options = options
            form_input.value = current if current in (field.options or []) else ""
        else:
            form_input.value = _prefill(existing_record, field.key)
            if field.data_type == FieldType.NUMBER:
                form_input.min = field.min
                form_input.max = field.max
                form_input.step = field.step

        inputs.append(form_input)
    return FormSpec(inputs=inputs)

def _as_text(value: Any) -> str:
    return "" if value is None else str(value).strip()

def _label(form_input: FormInput) -> str:
    return form_input.label.removesuffix(" *")

def _check_number(form_input: FormInput, text: str) -> Optional[str]:
    try:
        number = Decimal(text)
    except InvalidOperation:
        return f"{_label(form_input)} must be a number"
    if not number.is_finite():
        return f"{_label(form_input)} must be a number"
    if form_input.min is not None and number < Decimal(str(form_input.min)):
        return f"{_label(form_input)} must be at least {form_input.min}"
    if form_input.max is not None and number > Decimal(str(form_input.max)):
        return f"{_label(form_input)} must be at most {form_input.max}"
    if form_input.step is not None:
        base = Decimal(str(form_input.min)) if form_input.min is not None else Decimal(0)
        if (number - base) % Decimal(str(form_input.step)) != 0:
            return f"{_label(form_input)} must be a multiple of {form_input.step}"
    elif number != number.to_integral_value():
        # Browsers default number inputs to step 1
        return f"{_label(form_input)} must be a whole number"
    return None

def validate_submission(form: FormSpec, data: Dict[str, Any]) -> List[str]:
    """
    Applies the constraints a browser enforces on the rendered widgets
    (required, number range/step, email, date, select choices).
    Returns one message per violated field; empty when the form may be sent.
    """
    errors: List[str] = []
    for form_input in form.inputs:
        text = _as_text(data.get(form_input.name))
        if not text:
            if form_input.required:
                errors.append(f"{_label(form_input)} is required")
            continue

        if form_input.input_type == FieldType.NUMBER:
            problem = _check_number(form_input, text)
            if problem:
                errors.append(problem)
        elif form_input.input_type == FieldType.EMAIL:
            if not _is_email(text):
                errors.append(f"{_label(form_input)} must be a valid email address")
        elif form_input.input_type == FieldType.DATE:
            try:
                date.fromisoformat(text)
            except ValueError:
                errors.append(f"{_label(form_input)} must be a date (YYYY-MM-DD)")
        elif form_input.input_type == FieldType.SELECT:
            allowed = [option.value for option in form_input.options or [] if option.value]
            if text not in allowed:
                errors.append(f"{_label(form_input)} must be one of {', '.join(allowed)}")

    if errors:
        logger.debug(f"Form rejected: {errors}")
    return errors

def collect_payload(form: FormSpec, data: Dict[str, Any]) -> Dict[str, Any]:
    """Builds the request body from submitted values, one entry per widget."""
    payload: Dict[str, Any] = {}
    for form_input in form.inputs:
        text = _as_text(data.get(form_input.name))
        if form_input.input_type == FieldType.NUMBER:
            if not text:
                payload[form_input.name] = None
                continue
            try:
                payload[form_input.name] = int(text)
            except ValueError:
                payload[form_input.name] = float(text)
        else:
            payload[form_input.name] = text
    return payload
