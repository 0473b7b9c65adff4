import json
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import httpx

from services.record_service import RecordService

BASE_URL = "http://backend.test"


class FakeBackend:
    """In-memory json-server look-alike served through httpx.MockTransport."""

    def __init__(self, records: Optional[Dict[str, List[Dict[str, Any]]]] = None, send_total: bool = True):
        self.records = {entity: [dict(r) for r in rows] for entity, rows in (records or {}).items()}
        self.send_total = send_total
        self.failures: Dict[Tuple[str, str], int] = {}
        self.requests: List[httpx.Request] = []
        self.offline = False
        self._next_id = 1000

    def fail(self, method: str, entity: str, status_code: int) -> None:
        self.failures[(method, entity)] = status_code

    def requests_for(self, method: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    def service(self) -> RecordService:
        return RecordService(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))

    def _find(self, entity: str, record_id: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self.records.get(entity, []) if str(r.get("id")) == record_id), None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        parts = request.url.path.strip("/").split("/")
        entity = parts[0]
        record_id = parts[1] if len(parts) > 1 else None

        forced = self.failures.get((request.method, entity))
        if forced:
            return httpx.Response(forced, json={})

        rows = self.records.setdefault(entity, [])
        if request.method == "GET" and record_id is None:
            return self._list(rows, request.url.params)

        body = json.loads(request.content) if request.content else {}
        if request.method == "POST":
            self._next_id += 1
            created = {**body, "id": str(self._next_id)}
            rows.append(created)
            return httpx.Response(201, json=created)

        existing = self._find(entity, record_id)
        if existing is None:
            return httpx.Response(404, json={})
        if request.method == "GET":
            return httpx.Response(200, json=existing)
        if request.method == "PUT":
            existing.clear()
            existing.update({**body, "id": record_id})
            return httpx.Response(200, json=existing)
        if request.method == "PATCH":
            existing.update(body)
            return httpx.Response(200, json=existing)
        if request.method == "DELETE":
            rows.remove(existing)
            return httpx.Response(200, json={})
        return httpx.Response(405)

    def _list(self, rows: List[Dict[str, Any]], params: httpx.QueryParams) -> httpx.Response:
        items = list(rows)
        text = params.get("q")
        if text:
            items = [r for r in items if any(text.lower() in str(v).lower() for v in r.values())]
        if params.get("_sort"):
            key = params["_sort"]
            items.sort(key=lambda r: str(r.get(key, "")), reverse=params.get("_order") == "desc")

        total = len(items)
        page = int(params.get("_page", 1))
        limit = int(params.get("_limit", 10))
        page_items = items[(page - 1) * limit:page * limit]
        headers = {"X-Total-Count": str(total)} if self.send_total else {}
        return httpx.Response(200, json=page_items, headers=headers)


def make_students(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": str(i),
            "firstName": f"Student{i:02d}",
            "lastName": "Doe",
            "email": f"student{i}@example.edu",
            "enrollmentDate": "2024-09-01",
            "major": "Physics",
            "gpa": 3.5,
        }
        for i in range(1, count + 1)
    ]


def make_courses() -> List[Dict[str, Any]]:
    return [
        {"id": "1", "courseCode": "CS101", "courseName": "Intro to CS", "credits": 3,
         "department": "CS", "semester": "Fall", "description": ""},
        {"id": "2", "courseCode": "MA201", "courseName": "Linear Algebra", "credits": 4,
         "department": "Math", "semester": "Spring", "description": "Vectors"},
    ]
