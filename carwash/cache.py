"""
In-process cache for entity collections with change notification and
connectivity tracking.

One ``Cache`` is created per application and handed to the data layer; it is
never imported as a global.
"""
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Listener = Callable[[str, Optional[Any]], None]

SYNCED = "synced"
SYNCING = "syncing"
ERROR = "error"
OFFLINE = "offline"

_MISSING = object()


class Cache:
    """Bounded key/value map with per-key subscribers.

    Least recently used keys are evicted once ``max_entries`` is reached.
    Listeners are called with ``(key, value)`` after a set, and with
    ``(key, None)`` when the key is deleted, evicted or invalidated.
    """

    def __init__(self, max_entries: int = 256):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._lock = threading.RLock()
        self._values: "OrderedDict[str, Any]" = OrderedDict()
        self._listeners: Dict[str, List[Listener]] = {}
        self._online = True
        self._status = SYNCED
        self._epoch = 0
        self._generations: Dict[str, int] = {}

    # Map operations

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._values:
                logger.debug("Cache MISS: %s", key)
                return default
            self._values.move_to_end(key)
            logger.debug("Cache HIT: %s", key)
            return self._values[key]

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def generation(self, key: str) -> Tuple[int, int]:
        """Token that changes whenever ``key`` is invalidated."""
        with self._lock:
            return self._epoch, self._generations.get(key, 0)

    def set(self, key: str, value: Any, generation: Optional[Tuple[int, int]] = None) -> bool:
        """Store ``value``; with ``generation`` the write is dropped if the key
        was invalidated after that token was taken."""
        evicted = []
        with self._lock:
            if generation is not None and generation != (self._epoch, self._generations.get(key, 0)):
                logger.debug("Cache STALE: %s", key)
                return False
            self._values[key] = value
            self._values.move_to_end(key)
            while len(self._values) > self.max_entries:
                old_key, _ = self._values.popitem(last=False)
                evicted.append(old_key)
        for old_key in evicted:
            logger.debug("Cache EVICT: %s", old_key)
            self._notify(old_key, None)
        self._notify(key, value)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            removed = self._values.pop(key, _MISSING) is not _MISSING
            self._generations[key] = self._generations.get(key, 0) + 1
        if removed:
            logger.debug("Cache DELETE: %s", key)
            self._notify(key, None)
        return removed

    def clear(self) -> None:
        with self._lock:
            keys = list(self._values)
            self._values.clear()
            self._epoch += 1
        for key in keys:
            self._notify(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._values)

    # Pub/sub

    def subscribe(self, key: str, listener: Listener) -> None:
        with self._lock:
            self._listeners.setdefault(key, []).append(listener)

    def unsubscribe(self, key: str, listener: Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(key)
            if not listeners:
                return
            try:
                listeners.remove(listener)
            except ValueError:
                return
            if not listeners:
                del self._listeners[key]

    def _notify(self, key: str, value: Optional[Any]) -> None:
        with self._lock:
            listeners = list(self._listeners.get(key, ()))
        for listener in listeners:
            try:
                listener(key, value)
            except Exception:
                logger.exception("Cache listener failed for key %s", key)

    # Sync state

    @property
    def online(self) -> bool:
        return self._online

    @property
    def sync_status(self) -> str:
        return self._status

    def mark(self, status: str) -> None:
        if status not in {SYNCED, SYNCING, ERROR, OFFLINE}:
            raise ValueError(f"Unknown sync status: {status}")
        with self._lock:
            if not self._online and status != OFFLINE:
                return
            previous, self._status = self._status, status
        if previous != status:
            logger.info("Sync status %s -> %s", previous, status)

    def set_online(self, online: bool) -> List[str]:
        """Record a connectivity change.

        Going back online invalidates every key and returns them so the
        caller can refetch; going offline keeps the cached values readable.
        """
        with self._lock:
            was_online = self._online
            self._online = online
        if not online:
            self.mark(OFFLINE)
            return []
        if was_online:
            return []
        keys = self.keys()
        self.clear()
        logger.info("Back online, invalidated %d cached keys", len(keys))
        self.mark(SYNCED)
        return keys

