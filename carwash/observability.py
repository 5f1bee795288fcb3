import logging
import time
import uuid
from typing import Callable

from fastapi import Request

from carwash.settings import get_settings


def configure_logging() -> logging.Logger:
    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return logging.getLogger("carwash")


def request_logging_middleware(logger: logging.Logger) -> Callable:
    request_id_header = get_settings().request_id_header

    async def middleware(request: Request, call_next):
        request_id = request.headers.get(request_id_header) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        response.headers[request_id_header] = request_id
        logger.info(
            "request_id=%s method=%s path=%s query=%s status=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            request.url.query or "-",
            response.status_code,
            duration_ms,
        )
        return response

    return middleware
