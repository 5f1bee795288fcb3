import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel, to_snake

from carwash.errors import DuplicateError
from carwash.storage.base import Storage


def to_document(model, values: Dict[str, Any]) -> Dict[str, Any]:
    """Model field values -> camelCase document, column defaults filled in."""
    document = {}
    for column in model.__table__.columns:
        if column.key in values:
            value = values[column.key]
        elif column.key == "created_at":
            value = datetime.now(timezone.utc)
        elif column.default is not None and column.default.is_scalar:
            value = column.default.arg
        else:
            value = None
        document[to_camel(column.key)] = value
    return document


def from_document(model, document: Dict[str, Any]) -> Any:
    return model(**{to_snake(key): value for key, value in document.items()})


class MemoryStorage(Storage):
    """Document-style backend kept in process memory.

    Each collection maps ids to camelCase documents, mirroring the document
    database layout. Reads always build fresh records, so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._documents: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._counters: Dict[str, int] = {}

    def _collection(self, collection: str) -> Dict[int, Dict[str, Any]]:
        self.model_for(collection)
        return self._documents.setdefault(collection, {})

    def all(self, collection: str) -> List[Any]:
        model = self.model_for(collection)
        with self._lock:
            documents = [dict(doc) for _, doc in sorted(self._collection(collection).items())]
        return [from_document(model, doc) for doc in documents]

    def get(self, collection: str, record_id: int) -> Optional[Any]:
        model = self.model_for(collection)
        with self._lock:
            document = self._collection(collection).get(record_id)
            document = dict(document) if document is not None else None
        if document is None:
            return None
        return from_document(model, document)

    def create(self, collection: str, values: Dict[str, Any]) -> Any:
        model = self.model_for(collection)
        with self._lock:
            documents = self._collection(collection)
            self._check_unique_email(collection, documents, values, exclude_id=None)
            record_id = self._counters.get(collection, 0) + 1
            self._counters[collection] = record_id
            document = to_document(model, {**values, "id": record_id})
            documents[record_id] = document
            document = dict(document)
        return from_document(model, document)

    def update(self, collection: str, record_id: int, values: Dict[str, Any]) -> Optional[Any]:
        model = self.model_for(collection)
        with self._lock:
            documents = self._collection(collection)
            existing = documents.get(record_id)
            if existing is None:
                return None
            self._check_unique_email(collection, documents, values, exclude_id=record_id)
            document = dict(existing)
            for key, value in values.items():
                document[to_camel(key)] = value
            document["id"] = record_id
            documents[record_id] = document
            document = dict(document)
        return from_document(model, document)

    def delete(self, collection: str, record_id: int) -> bool:
        with self._lock:
            return self._collection(collection).pop(record_id, None) is not None

    def ping(self) -> None:
        return None

    @staticmethod
    def _check_unique_email(collection, documents, values, exclude_id) -> None:
        if collection != "users" or "email" not in values:
            return
        wanted = values["email"].lower()
        for doc_id, document in documents.items():
            if doc_id != exclude_id and document["email"].lower() == wanted:
                raise DuplicateError("Email already registered")
