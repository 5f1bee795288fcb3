from fastapi import Depends, Request
from sqlalchemy.orm import Session

from carwash.cache import Cache
from carwash.data import DataAccess
from carwash.database import get_db
from carwash.storage import SqlStorage, Storage


def get_cache(request: Request) -> Cache:
    return request.app.state.cache


def get_storage(request: Request, db: Session = Depends(get_db)) -> Storage:
    shared = getattr(request.app.state, "storage", None)
    if shared is not None:
        return shared
    return SqlStorage(db)


def get_data(
    storage: Storage = Depends(get_storage),
    cache: Cache = Depends(get_cache),
) -> DataAccess:
    return DataAccess(storage, cache)
