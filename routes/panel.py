# File: routes/panel.py

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from typing import List
import logging

from config import settings
from entity_config import ENTITIES
from exceptions import InvalidEvent, UnknownEntity
from models.entity_schema import EntityDefinition
from models.view import PanelView, UIEvent
from services.session_store import SessionStore, get_session_store
from services.view_controller import ViewController

router = APIRouter(prefix="/panel", tags=["Admin Panel"])
logger = logging.getLogger(__name__)


async def get_controller(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
) -> ViewController:
    """
    Resolves the caller's session from its cookie, creating one (and loading
    the first page) when the browser has none yet.
    """
    session_id, controller = sessions.get_or_create(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response.set_cookie(settings.SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    await controller.start()
    return controller


def _present(controller: ViewController) -> PanelView:
    # Toasts are shown once, so they leave the queue with this response
    view = controller.render()
    controller.drain_notifications()
    return view


@router.get("/view", response_model=PanelView, summary="Get the current panel view for this session")
async def get_view(controller: ViewController = Depends(get_controller)):
    return _present(controller)


@router.post("/events", response_model=PanelView, summary="Apply a UI event and return the new view")
async def post_event(event: UIEvent, controller: ViewController = Depends(get_controller)):
    """
    Single entry point for every interaction on the page (navigation, search,
    sorting, pagination, modal and delete actions), dispatched by event type.
    """
    try:
        await controller.dispatch(event)
    except UnknownEntity as e:
        logger.warning(f"Rejected event {event.type.value}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidEvent as e:
        logger.warning(f"Rejected event {event.type.value}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return _present(controller)


@router.get("/entities", response_model=List[EntityDefinition], summary="List managed entities and their fields")
async def list_entities():
    return list(ENTITIES.values())


@router.delete("/session", summary="Forget this browser's panel session")
async def close_session(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
):
    closed = sessions.discard(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"closed": closed}
