from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from carwash.settings import get_settings

settings = get_settings()
database_url = settings.database_url

connect_args = {}
if database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(database_url, connect_args=connect_args)

# Records outlive their session in the collection cache, so commits must not
# expire them.
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

Base = declarative_base()


def create_schema() -> None:
    """Create every table straight from the models (used when migrations are off)."""
    # Importing registers the tables on Base.metadata.
    from carwash import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
