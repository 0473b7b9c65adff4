from typing import Optional


class PanelError(Exception):
    """Base class for every failure the panel surfaces to the user."""


class TransportError(PanelError):
    """
    The REST backend answered with a non-success status, or could not be reached.
    Network failures are reported with status 503, like an unreachable upstream.
    """

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP error! status: {status_code}")


class NotFound(TransportError):
    """The backend reported no record with the requested id."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(404, f"{entity} with id {record_id} not found")


class DecodeError(PanelError):
    """The response body was not JSON of the expected shape."""


class UnknownEntity(PanelError):
    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"Unknown entity '{entity}'")


class InvalidEvent(PanelError):
    """A UI event arrived without the target or value it needs."""
