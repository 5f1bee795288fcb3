import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


_load_env_file()


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(value: str, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


STORAGE_BACKENDS = {"sql", "memory"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    environment: str
    database_url: str
    storage_backend: str
    docs_enabled: bool
    auto_run_migrations: bool
    seed_sample_data: bool
    log_level: str
    request_id_header: str
    cache_max_entries: int
    admin_email: str
    admin_password: str


@lru_cache
def get_settings() -> Settings:
    environment = os.getenv("ENVIRONMENT", "development")
    non_production = environment != "production"

    storage_backend = os.getenv("STORAGE_BACKEND", "sql").strip().lower()
    if storage_backend not in STORAGE_BACKENDS:
        storage_backend = "sql"

    return Settings(
        app_name=os.getenv("APP_NAME", "Car Wash Manager"),
        environment=environment,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./carwash.db"),
        storage_backend=storage_backend,
        docs_enabled=_as_bool(os.getenv("DOCS_ENABLED"), default=non_production),
        auto_run_migrations=_as_bool(
            os.getenv("AUTO_RUN_MIGRATIONS"),
            default=non_production,
        ),
        seed_sample_data=_as_bool(os.getenv("SEED_SAMPLE_DATA"), default=non_production),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        request_id_header=os.getenv("REQUEST_ID_HEADER", "X-Request-ID"),
        cache_max_entries=max(_as_int(os.getenv("CACHE_MAX_ENTRIES"), default=256), 1),
        admin_email=os.getenv("ADMIN_EMAIL", ""),
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
    )
