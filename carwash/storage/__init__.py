from carwash.storage.base import Storage
from carwash.storage.memory import MemoryStorage
from carwash.storage.sql import SqlStorage

__all__ = ["Storage", "MemoryStorage", "SqlStorage"]
