from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from carwash.cache import Cache
from carwash.database import create_schema, engine
from carwash.errors import CarWashError
from carwash.migrations import run_migrations
from carwash.observability import configure_logging, request_logging_middleware
from carwash.routers import api, health
from carwash.seed import ensure_admin_user, seed_sample_data
from carwash.settings import get_settings
from carwash.storage import MemoryStorage, SqlStorage

settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
)
app.state.cache = Cache(max_entries=settings.cache_max_entries)
app.state.storage = MemoryStorage() if settings.storage_backend == "memory" else None

app.include_router(api.router)
app.include_router(health.router)


def prepare_storage() -> None:
    memory = app.state.storage
    if memory is not None:
        _populate(memory)
        return

    if settings.auto_run_migrations:
        run_migrations()
    else:
        create_schema()
    with Session(engine) as db:
        _populate(SqlStorage(db))


def _populate(storage) -> None:
    if settings.seed_sample_data and seed_sample_data(storage):
        logger.info("Sample data loaded into %s storage", settings.storage_backend)
    ensure_admin_user(storage, settings.admin_email, settings.admin_password)


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(problems) or "Invalid request"


prepare_storage()


app.middleware("http")(request_logging_middleware(logger))


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


@app.exception_handler(CarWashError)
async def carwash_error_handler(request: Request, exc: CarWashError):
    if exc.status_code >= 500:
        logger.warning("%s on %s %s", exc.message, request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _describe_validation_error(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "unknown")
    logger.exception(
        "Unhandled error request_id=%s method=%s path=%s",
        request_id,
        request.method,
        request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "request_id": request_id},
    )
