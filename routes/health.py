from fastapi import APIRouter, Depends
import logging

from services.record_service import RecordService

router = APIRouter(prefix="/health", tags=["Health Check"])
logger = logging.getLogger(__name__)

def get_record_service() -> RecordService:
    return RecordService()

@router.get("/backend", summary="Check if the records backend is reachable")
async def check_backend(service: RecordService = Depends(get_record_service)):
    """
    Any HTTP answer from the backend counts as reachable; only network
    failures report it offline.
    """
    if await service.ping():
        return {"status": "online", "message": "Records backend is reachable", "url": service.base_url}
    logger.warning(f"Records backend at {service.base_url} is not reachable")
    return {"status": "offline", "message": "Records backend is not reachable", "url": service.base_url}
