import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from carwash.dependencies import get_storage
from carwash.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz():
    return {"status": "ok"}


@router.get("/readyz")
def readyz(storage: Storage = Depends(get_storage)):
    try:
        storage.ping()
    except Exception:
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return {"status": "ready"}
