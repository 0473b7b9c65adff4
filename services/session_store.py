import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from config import settings
from services.record_service import RecordService
from services.view_controller import ViewController

logger = logging.getLogger(__name__)

class SessionStore:
    """
    One ViewController per browser session, kept in memory only. State is
    never persisted, so a restart starts every session from scratch.

    Sessions idle for longer than `idle_seconds` are dropped, and once more
    than `max_sessions` are open the least recently used one goes first.
    """

    def __init__(
        self,
        service_factory: Callable[[], RecordService] = RecordService,
        max_sessions: Optional[int] = None,
        idle_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._service_factory = service_factory
        self.max_sessions = max_sessions or settings.SESSION_MAX
        self.idle_seconds = idle_seconds or settings.SESSION_IDLE_SECONDS
        self._clock = clock
        # session id -> (controller, last seen); least recently used first
        self._controllers: "OrderedDict[str, Tuple[ViewController, float]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def _expire(self, now: float) -> None:
        while self._controllers:
            session_id, (_, last_seen) = next(iter(self._controllers.items()))
            if now - last_seen < self.idle_seconds:
                break
            del self._controllers[session_id]
            logger.info(f"Panel session {session_id} expired")

    def get(self, session_id: Optional[str]) -> Optional[ViewController]:
        now = self._clock()
        self._expire(now)
        if not session_id or session_id not in self._controllers:
            return None
        controller, _ = self._controllers[session_id]
        self._controllers[session_id] = (controller, now)
        self._controllers.move_to_end(session_id)
        return controller

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, ViewController]:
        controller = self.get(session_id)
        if controller is not None:
            return session_id, controller

        while len(self._controllers) >= self.max_sessions:
            evicted, _ = self._controllers.popitem(last=False)
            logger.info(f"Panel session {evicted} evicted, {self.max_sessions} sessions open")

        session_id = uuid.uuid4().hex
        controller = ViewController(self._service_factory())
        self._controllers[session_id] = (controller, self._clock())
        logger.info(f"New panel session {session_id}")
        return session_id, controller

    def discard(self, session_id: Optional[str]) -> bool:
        if session_id and self._controllers.pop(session_id, None) is not None:
            logger.info(f"Panel session {session_id} closed")
            return True
        return False

    def clear(self) -> None:
        self._controllers.clear()

# Global store used by the HTTP layer
store = SessionStore()

def get_session_store() -> SessionStore:
    """
    Returns the process-wide session store. Declared as a FastAPI dependency
    so tests can swap in a store backed by a fake REST backend.
    """
    return store
