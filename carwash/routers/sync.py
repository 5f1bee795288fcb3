import logging

from fastapi import APIRouter, Depends

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sync", tags=["Sync"])


def _status(data: DataAccess) -> dict:
    return {
        "status": data.cache.sync_status,
        "online": data.cache.online,
        "keys": sorted(data.cache.keys()),
    }


@router.get("/status", response_model=schemas.SyncStatusOut)
def sync_status(data: DataAccess = Depends(get_data)):
    return _status(data)


@router.post("/online", response_model=schemas.SyncStatusOut)
def set_online(payload: schemas.SyncOnlineRequest, data: DataAccess = Depends(get_data)):
    invalidated = data.cache.set_online(payload.online)
    if invalidated:
        refreshed = data.refresh(invalidated)
        logger.info("Refetched %s after reconnect", ", ".join(refreshed) or "nothing")
    return _status(data)
