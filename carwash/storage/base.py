from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from carwash.models import COLLECTIONS


class Storage(ABC):
    """Generic CRUD over the named entity collections.

    Records come back as model instances whatever the backend, so callers
    read ``record.total_price`` the same way everywhere.
    """

    @staticmethod
    def model_for(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    @abstractmethod
    def all(self, collection: str) -> List[Any]:
        ...

    @abstractmethod
    def get(self, collection: str, record_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def create(self, collection: str, values: Dict[str, Any]) -> Any:
        ...

    @abstractmethod
    def update(self, collection: str, record_id: int, values: Dict[str, Any]) -> Optional[Any]:
        """Replace every field in ``values``; ``None`` when the id is unknown."""

    @abstractmethod
    def delete(self, collection: str, record_id: int) -> bool:
        ...

    @abstractmethod
    def ping(self) -> None:
        """Raise if the backend cannot serve requests."""

    def find_user_by_email(self, email: str) -> Optional[Any]:
        wanted = email.strip().lower()
        for user in self.all("users"):
            if user.email.lower() == wanted:
                return user
        return None
