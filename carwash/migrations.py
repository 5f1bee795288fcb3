from pathlib import Path

from alembic import command
from alembic.config import Config

from carwash.settings import get_settings

ROOT = Path(__file__).resolve().parent.parent


def alembic_config() -> Config:
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    # Config values go through configparser interpolation.
    config.set_main_option("sqlalchemy.url", get_settings().database_url.replace("%", "%%"))
    return config


def run_migrations() -> None:
    command.upgrade(alembic_config(), "head")
