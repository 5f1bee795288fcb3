import logging
from typing import Any, Dict, Iterable, List

from carwash.cache import ERROR, SYNCED, SYNCING, Cache
from carwash.errors import DataSourceOffline, NotFoundError
from carwash.models import COLLECTIONS, ENTITY_LABELS
from carwash.storage import Storage

logger = logging.getLogger(__name__)


class DataAccess:
    """Single read/write path for entity collections.

    Whole collections are cached under their name; any write invalidates the
    collection it touched.
    """

    def __init__(self, storage: Storage, cache: Cache):
        self.storage = storage
        self.cache = cache

    def collection(self, name: str) -> List[Any]:
        records = self.cache.get(name)
        if records is not None:
            return records
        if not self.cache.online:
            raise DataSourceOffline(f"Data source is offline and {name} is not cached")

        # A write landing while we load bumps the generation and the load is
        # served to this caller only.
        generation = self.cache.generation(name)
        self.cache.mark(SYNCING)
        try:
            records = self.storage.all(name)
        except Exception:
            self.cache.mark(ERROR)
            logger.exception("Failed to load collection %s", name)
            raise
        self.cache.set(name, records, generation=generation)
        self.cache.mark(SYNCED)
        return records

    def get(self, name: str, record_id: int) -> Any:
        for record in self.collection(name):
            if record.id == record_id:
                return record
        raise NotFoundError(f"{ENTITY_LABELS[name]} not found")

    def create(self, name: str, values: Dict[str, Any]) -> Any:
        self._require_online()
        record = self.storage.create(name, values)
        self.cache.delete(name)
        logger.info("Created %s id=%s", name, record.id)
        return record

    def update(self, name: str, record_id: int, values: Dict[str, Any]) -> Any:
        self._require_online()
        record = self.storage.update(name, record_id, values)
        if record is None:
            raise NotFoundError(f"{ENTITY_LABELS[name]} not found")
        self.cache.delete(name)
        logger.info("Updated %s id=%s", name, record_id)
        return record

    def delete(self, name: str, record_id: int) -> None:
        self._require_online()
        if not self.storage.delete(name, record_id):
            raise NotFoundError(f"{ENTITY_LABELS[name]} not found")
        self.cache.delete(name)
        logger.info("Deleted %s id=%s", name, record_id)

    def refresh(self, names: Iterable[str]) -> List[str]:
        """Reload the given collections into the cache, skipping unknown keys."""
        refreshed = []
        for name in names:
            if name in COLLECTIONS:
                self.collection(name)
                refreshed.append(name)
        return refreshed

    def _require_online(self) -> None:
        if not self.cache.online:
            raise DataSourceOffline("Data source is offline; changes cannot be saved")
