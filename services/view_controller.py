import logging
from typing import Any, Dict, List, Optional

from config import settings
from entity_config import entity_definition, fields_for, supported_entities
from exceptions import InvalidEvent, PanelError
from models.entity_schema import EntityDefinition, FieldDescriptor
from models.panel_state import ModalMode, ModalState, QueryState, Record, SortOrder
from models.view import (
    ConfirmationPrompt,
    EventType,
    FormSpec,
    ModalView,
    NavItem,
    Notification,
    NotificationLevel,
    PaginationView,
    PanelView,
    TableView,
    UIEvent,
)
from services.form_renderer import collect_payload, render_form, validate_submission
from services.record_service import RecordService
from services.table_renderer import render_table, sort_options
from utils.pagination import build_pagination, has_next, has_previous

logger = logging.getLogger(__name__)

class ViewController:
    """
    Owns the state of one panel session (query, modal, pending delete) and
    drives the record service and renderers from UI events.

    Operations never raise on backend failures: they log, queue an error
    notification and leave the previously displayed table in place.
    Overlapping calls are not coordinated; the last response to arrive wins.
    """

    def __init__(self, service: Optional[RecordService] = None, page_size: Optional[int] = None):
        self.service = service or RecordService()
        self.query = QueryState(entity=supported_entities()[0], page_size=page_size or settings.PAGE_SIZE)
        self.modal = ModalState()
        self.modal_record: Optional[Record] = None
        self.pending_delete_id: Optional[str] = None
        self.loading = False
        self.started = False

        # What the page currently shows; replaced only by a successful load
        self.table: Optional[TableView] = None
        self.pagination: Optional[PaginationView] = None
        self.total_count = 0

        self.notifications: List[Notification] = []

    @property
    def definition(self) -> EntityDefinition:
        return entity_definition(self.query.entity)

    @property
    def fields(self) -> List[FieldDescriptor]:
        return fields_for(self.query.entity)

    def _field(self, key: str) -> Optional[FieldDescriptor]:
        return next((field for field in self.fields if field.key == key), None)

    # Notifications and loading

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        self.notifications.append(Notification(message=message, level=level, duration_seconds=settings.NOTIFICATION_SECONDS))

    def _fail(self, message: str, error: Exception) -> None:
        self.loading = False
        self.notify(message, NotificationLevel.ERROR)
        if isinstance(error, PanelError):
            logger.error(f"{message}: {error}")
        else:
            logger.exception(f"{message}: unexpected error")

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # Listing

    async def start(self) -> None:
        """First load of a fresh session; later calls do nothing."""
        if not self.started:
            self.started = True
            await self.reload()

    async def reload(self) -> bool:
        query = self.query.model_copy()
        fields = fields_for(query.entity)
        self.loading = True
        try:
            result = await self.service.list(query.entity, query)
        except Exception as e:
            self._fail("Failed to load data", e)
            return False

        self.table = render_table(fields, result.records, query.sort_field, query.sort_order)
        self.pagination = build_pagination(query.page, query.page_size, result.total_count)
        self.total_count = result.total_count
        self.loading = False
        return True

    async def switch_entity(self, entity: str) -> bool:
        entity_definition(entity)
        logger.info(f"Switching panel to {entity}")
        self.query = QueryState(entity=entity, page_size=self.query.page_size)
        self.pending_delete_id = None
        self.close_modal()
        return await self.reload()

    async def set_search(self, text: str) -> bool:
        self.query.search_text = text
        self.query.page = 1
        return await self.reload()

    async def set_sort(self, value: str) -> bool:
        """Applies a sort selector value: `field:order`, or blank to clear the sort."""
        if not value:
            self.query.sort_field = None
            self.query.sort_order = SortOrder.ASC
            return await self.reload()

        key, _, order = value.partition(":")
        field = self._field(key)
        if field is None or not field.sortable or order not in (SortOrder.ASC.value, SortOrder.DESC.value):
            logger.warning(f"Ignoring invalid sort selection {value!r} for {self.query.entity}")
            return False
        self.query.sort_field = key
        self.query.sort_order = SortOrder(order)
        return await self.reload()

    async def click_header(self, key: str) -> bool:
        field = self._field(key)
        if field is None or not field.sortable:
            logger.warning(f"Ignoring click on non-sortable column {key!r}")
            return False

        if self.query.sort_field == key:
            self.query.sort_order = SortOrder.DESC if self.query.sort_order == SortOrder.ASC else SortOrder.ASC
        else:
            self.query.sort_field = key
            self.query.sort_order = SortOrder.ASC
        return await self.reload()

    def sort_value(self) -> str:
        if not self.query.sort_field:
            return ""
        return f"{self.query.sort_field}:{self.query.sort_order.value}"

    async def next_page(self) -> bool:
        if not has_next(self.query.page, self.query.page_size, self.total_count):
            return False
        self.query.page += 1
        return await self.reload()

    async def previous_page(self) -> bool:
        if not has_previous(self.query.page):
            return False
        self.query.page -= 1
        return await self.reload()

    # Modal

    def open_add(self) -> None:
        self.modal = ModalState(is_open=True, mode=ModalMode.ADD)
        self.modal_record = None

    async def open_edit(self, record_id: str) -> bool:
        self.loading = True
        try:
            record = await self.service.get_by_id(self.query.entity, record_id)
        except Exception as e:
            self._fail("Failed to load record", e)
            return False

        self.loading = False
        self.modal = ModalState(is_open=True, mode=ModalMode.EDIT, target_id=str(record_id))
        self.modal_record = record
        return True

    def close_modal(self) -> None:
        self.modal = ModalState()
        self.modal_record = None

    def current_form(self) -> Optional[FormSpec]:
        if not self.modal.is_open:
            return None
        return render_form(self.fields, self.modal_record)

    async def submit_form(self, data: Dict[str, Any]) -> bool:
        form = self.current_form()
        if form is None:
            logger.warning("Form submitted while the modal is closed")
            return False

        errors = validate_submission(form, data)
        if errors:
            self.notify(errors[0], NotificationLevel.ERROR)
            return False

        payload = collect_payload(form, data)
        entity = self.query.entity
        self.loading = True
        try:
            if self.modal.mode == ModalMode.ADD:
                await self.service.create(entity, payload)
                message = "Record created successfully"
            else:
                await self.service.update(entity, self.modal.target_id, payload)
                message = "Record updated successfully"
        except Exception as e:
            self._fail("Failed to save record", e)
            return False

        self.notify(message)
        self.close_modal()
        self.loading = False
        await self.reload()
        return True

    # Deletion

    def request_delete(self, record_id: str) -> ConfirmationPrompt:
        """Asks for confirmation; nothing is sent until `confirm_delete`."""
        self.pending_delete_id = str(record_id)
        return ConfirmationPrompt(record_id=self.pending_delete_id)

    async def confirm_delete(self, accepted: bool) -> bool:
        record_id, self.pending_delete_id = self.pending_delete_id, None
        if record_id is None:
            return False
        if not accepted:
            logger.info(f"Deletion of {self.query.entity} record {record_id} cancelled")
            return False

        self.loading = True
        try:
            await self.service.remove(self.query.entity, record_id)
        except Exception as e:
            self._fail("Failed to delete record", e)
            return False

        self.loading = False
        self.notify("Record deleted successfully")
        await self.reload()
        return True

    # Events

    async def dispatch(self, event: UIEvent) -> None:
        """Routes one page interaction to the matching operation."""
        kind = event.type
        if kind in (EventType.SWITCH_ENTITY, EventType.HEADER_CLICK, EventType.OPEN_EDIT, EventType.DELETE) and not event.target:
            raise InvalidEvent(f"Event '{kind.value}' needs a target")

        if kind == EventType.SWITCH_ENTITY:
            await self.switch_entity(event.target)
        elif kind == EventType.SEARCH:
            await self.set_search("" if event.value is None else str(event.value))
        elif kind == EventType.SORT:
            await self.set_sort("" if event.value is None else str(event.value))
        elif kind == EventType.HEADER_CLICK:
            await self.click_header(event.target)
        elif kind == EventType.NEXT_PAGE:
            await self.next_page()
        elif kind == EventType.PREVIOUS_PAGE:
            await self.previous_page()
        elif kind == EventType.OPEN_ADD:
            self.open_add()
        elif kind == EventType.OPEN_EDIT:
            await self.open_edit(event.target)
        elif kind == EventType.SUBMIT:
            if not isinstance(event.value, dict):
                raise InvalidEvent("Submit event needs the form values as an object")
            await self.submit_form(event.value)
        elif kind == EventType.CLOSE_MODAL:
            self.close_modal()
        elif kind == EventType.DELETE:
            self.request_delete(event.target)
        elif kind == EventType.CONFIRM_DELETE:
            if not isinstance(event.value, bool):
                raise InvalidEvent("Confirm delete event needs a true or false answer")
            await self.confirm_delete(event.value)
        elif kind == EventType.RELOAD:
            await self.reload()

    # Presentation

    def render(self) -> PanelView:
        definition = self.definition
        modal = ModalView()
        if self.modal.is_open:
            verb = "Add New" if self.modal.mode == ModalMode.ADD else "Edit"
            modal = ModalView(
                is_open=True,
                mode=self.modal.mode,
                target_id=self.modal.target_id,
                title=f"{verb} {definition.singular_title}",
                form=self.current_form(),
            )

        return PanelView(
            entity=definition.name,
            title=definition.title,
            subtitle=definition.subtitle,
            nav=[
                NavItem(entity=name, title=entity_definition(name).title, active=name == definition.name)
                for name in supported_entities()
            ],
            search_text=self.query.search_text,
            sort_options=sort_options(definition.fields),
            sort_value=self.sort_value(),
            table=self.table,
            pagination=self.pagination,
            modal=modal,
            loading=self.loading,
            confirmation=ConfirmationPrompt(record_id=self.pending_delete_id) if self.pending_delete_id else None,
            notifications=list(self.notifications),
        )
