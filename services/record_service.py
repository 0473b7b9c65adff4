import httpx
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from config import settings
from entity_config import entity_definition
from exceptions import DecodeError, NotFound, TransportError
from models.panel_state import ListResult, QueryState, Record, SortOrder

logger = logging.getLogger(__name__)

class RecordService:
    """
    Generic REST accessor for the records backend (json-server conventions).
    Every call opens its own client, surfaces the first failure to the caller
    and keeps no state between calls.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport)

    # Helper to construct resource paths, validating the entity first
    def resource_path(self, entity: str, record_id: Optional[Any] = None) -> str:
        entity_definition(entity)
        path = f"/{entity}"
        if record_id is not None:
            path += f"/{quote(str(record_id), safe='')}"
        return path

    async def _send(self, method: str, entity: str, record_id: Optional[Any] = None, **kwargs) -> httpx.Response:
        path = self.resource_path(entity, record_id)
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"🌐 Network error on {method} {path}: {e}")
            raise TransportError(503, f"Backend unreachable: {e}") from e

        if response.status_code == 404 and record_id is not None:
            logger.error(f"{method} {path} returned 404")
            raise NotFound(entity, str(record_id))
        if not response.is_success:
            logger.error(f"Backend returned an error for {method} {path}: {response.status_code} - {response.text}")
            raise TransportError(response.status_code)

        logger.debug(f"📤 {method} {path}: {response.status_code}")
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

    def _decode_record(self, response: httpx.Response) -> Record:
        data = self._decode(response)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    async def list(self, entity: str, query: QueryState) -> ListResult:
        """
        Fetches one page of records. The total comes from X-Total-Count; when the
        backend omits it, the page length stands in for it, which makes the
        next-page boundary unreliable for full pages.
        """
        response = await self._send("GET", entity, params=query.to_params())
        data = self._decode(response)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise DecodeError(f"Expected a JSON array of records for {entity}")

        total_header = response.headers.get("X-Total-Count")
        try:
            total = int(total_header) if total_header is not None else len(data)
        except ValueError:
            logger.warning(f"Ignoring malformed X-Total-Count header for {entity}: {total_header!r}")
            total = len(data)
        return ListResult(records=data, total_count=total)

    async def get_by_id(self, entity: str, record_id: Any) -> Record:
        response = await self._send("GET", entity, record_id)
        return self._decode_record(response)

    async def create(self, entity: str, payload: Dict[str, Any]) -> Record:
        response = await self._send("POST", entity, json=payload)
        record = self._decode_record(response)
        logger.info(f"✅ Created {entity} record {record.get('id')}")
        return record

    async def update(self, entity: str, record_id: Any, payload: Dict[str, Any]) -> Record:
        """Replaces the whole record (PUT)."""
        response = await self._send("PUT", entity, record_id, json=payload)
        logger.info(f"✅ Updated {entity} record {record_id}")
        return self._decode_record(response)

    async def patch(self, entity: str, record_id: Any, payload: Dict[str, Any]) -> Record:
        """Updates only the given fields (PATCH)."""
        response = await self._send("PATCH", entity, record_id, json=payload)
        logger.info(f"✅ Patched {entity} record {record_id}")
        return self._decode_record(response)

    async def remove(self, entity: str, record_id: Any) -> None:
        await self._send("DELETE", entity, record_id)
        logger.info(f"✅ Deleted {entity} record {record_id}")

    async def search(self, entity: str, text: str, page_size: Optional[int] = None) -> ListResult:
        query = QueryState(entity=entity, page_size=page_size or settings.PAGE_SIZE, search_text=text)
        return await self.list(entity, query)

    async def sort(self, entity: str, field: str, order: SortOrder = SortOrder.ASC, page_size: Optional[int] = None) -> ListResult:
        query = QueryState(entity=entity, page_size=page_size or settings.PAGE_SIZE, sort_field=field, sort_order=order)
        return await self.list(entity, query)

    async def ping(self) -> bool:
        """True when the backend answers at all, whatever the status."""
        try:
            async with self._client() as client:
                await client.get("/", timeout=5)
            return True
        except httpx.RequestError as e:
            logger.error(f"Network error checking backend connectivity: {e}")
            return False
