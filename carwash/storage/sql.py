import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carwash.errors import DuplicateError
from carwash.models import User
from carwash.storage.base import Storage

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Relational backend; one instance per request session."""

    def __init__(self, db: Session):
        self.db = db

    def all(self, collection: str) -> List[Any]:
        model = self.model_for(collection)
        return self.db.query(model).order_by(model.id).all()

    def get(self, collection: str, record_id: int) -> Optional[Any]:
        return self.db.get(self.model_for(collection), record_id)

    def create(self, collection: str, values: Dict[str, Any]) -> Any:
        record = self.model_for(collection)(**values)
        self.db.add(record)
        self._commit(collection)
        self.db.refresh(record)
        return record

    def update(self, collection: str, record_id: int, values: Dict[str, Any]) -> Optional[Any]:
        record = self.get(collection, record_id)
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        self._commit(collection)
        self.db.refresh(record)
        return record

    def delete(self, collection: str, record_id: int) -> bool:
        record = self.get(collection, record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.commit()
        return True

    def ping(self) -> None:
        self.db.execute(text("SELECT 1"))

    def find_user_by_email(self, email: str) -> Optional[Any]:
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def _commit(self, collection: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Integrity error writing to %s", collection)
            if collection == "users":
                raise DuplicateError("Email already registered")
            raise DuplicateError(f"Conflicting record in {collection}")
