import threading
import unittest

from carwash.cache import Cache
from carwash.data import DataAccess
from carwash.errors import DataSourceOffline, NotFoundError
from carwash.storage import MemoryStorage


class CacheMapTests(unittest.TestCase):
    def test_basic_operations(self) -> None:
        cache = Cache()
        self.assertFalse(cache.has("clients"))
        self.assertIsNone(cache.get("clients"))
        cache.set("clients", [1, 2])
        self.assertTrue(cache.has("clients"))
        self.assertEqual(cache.get("clients"), [1, 2])
        self.assertTrue(cache.delete("clients"))
        self.assertFalse(cache.delete("clients"))
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        self.assertEqual(cache.keys(), [])

    def test_least_recently_used_key_is_evicted(self) -> None:
        cache = Cache(max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        self.assertEqual(sorted(cache.keys()), ["a", "c"])

    def test_rejects_empty_bound(self) -> None:
        with self.assertRaises(ValueError):
            Cache(max_entries=0)

    def test_load_token_is_spent_by_invalidation(self) -> None:
        cache = Cache()
        token = cache.generation("clients")
        cache.delete("clients")
        self.assertFalse(cache.set("clients", ["stale"], generation=token))
        self.assertFalse(cache.has("clients"))

        token = cache.generation("clients")
        cache.clear()
        self.assertFalse(cache.set("clients", ["stale"], generation=token))

        token = cache.generation("clients")
        cache.delete("services")
        self.assertTrue(cache.set("clients", ["fresh"], generation=token))
        self.assertEqual(cache.get("clients"), ["fresh"])


class CacheSubscriptionTests(unittest.TestCase):
    def test_listeners_see_sets_and_invalidations(self) -> None:
        cache = Cache()
        seen = []

        def listener(key, value):
            seen.append((key, value))

        cache.subscribe("shifts", listener)
        cache.set("shifts", ["s1"])
        cache.set("clients", ["c1"])
        cache.delete("shifts")
        cache.unsubscribe("shifts", listener)
        cache.set("shifts", ["s2"])

        self.assertEqual(seen, [("shifts", ["s1"]), ("shifts", None)])

    def test_failing_listener_does_not_block_others(self) -> None:
        cache = Cache()
        seen = []

        def broken(key, value):
            raise RuntimeError("boom")

        cache.subscribe("users", broken)
        cache.subscribe("users", lambda key, value: seen.append(value))
        cache.set("users", ["u"])
        self.assertEqual(seen, [["u"]])

    def test_unsubscribe_unknown_listener_is_noop(self) -> None:
        cache = Cache()
        cache.unsubscribe("users", lambda key, value: None)


class CacheSyncStateTests(unittest.TestCase):
    def test_offline_then_reconnect_invalidates_everything(self) -> None:
        cache = Cache()
        cache.set("clients", [1])
        cache.set("services", [2])

        self.assertEqual(cache.set_online(False), [])
        self.assertEqual(cache.sync_status, "offline")
        self.assertEqual(cache.get("clients"), [1])

        cache.mark("syncing")
        self.assertEqual(cache.sync_status, "offline")

        invalidated = cache.set_online(True)
        self.assertEqual(sorted(invalidated), ["clients", "services"])
        self.assertEqual(cache.keys(), [])
        self.assertEqual(cache.sync_status, "synced")

    def test_repeated_online_signal_keeps_cache(self) -> None:
        cache = Cache()
        cache.set("clients", [1])
        self.assertEqual(cache.set_online(True), [])
        self.assertEqual(cache.keys(), ["clients"])


class FailingStorage(MemoryStorage):
    def all(self, collection):
        raise RuntimeError("database is down")


class SlowStorage(MemoryStorage):
    """Holds ``all()`` open after reading so a write can land mid-load."""

    def __init__(self):
        super().__init__()
        self.loaded = threading.Event()
        self.release = threading.Event()

    def all(self, collection):
        records = super().all(collection)
        self.loaded.set()
        self.release.wait(timeout=5)
        return records


class DataAccessTests(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = MemoryStorage()
        self.cache = Cache()
        self.data = DataAccess(self.storage, self.cache)

    def test_collections_are_cached_until_a_write(self) -> None:
        self.data.create("clients", {"name": "Ann", "surname": "Lee", "phone": "1"})
        first = self.data.collection("clients")
        self.assertIs(self.data.collection("clients"), first)

        self.data.create("clients", {"name": "Bob", "surname": "Ray", "phone": "2"})
        self.assertFalse(self.cache.has("clients"))
        self.assertEqual(len(self.data.collection("clients")), 2)

    def test_missing_record_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.data.get("vehicles", 42)
        self.assertEqual(ctx.exception.message, "Vehicle not found")
        with self.assertRaises(NotFoundError):
            self.data.update("vehicles", 42, {"make": "Kia"})
        with self.assertRaises(NotFoundError):
            self.data.delete("vehicles", 42)

    def test_offline_serves_cache_and_refuses_writes(self) -> None:
        self.data.create("clients", {"name": "Ann", "surname": "Lee", "phone": "1"})
        self.data.collection("clients")
        self.cache.set_online(False)

        self.assertEqual(len(self.data.collection("clients")), 1)
        with self.assertRaises(DataSourceOffline):
            self.data.collection("services")
        with self.assertRaises(DataSourceOffline):
            self.data.create("clients", {"name": "Bob", "surname": "Ray", "phone": "2"})

    def test_refresh_reloads_known_collections(self) -> None:
        refreshed = self.data.refresh(["clients", "not-a-collection"])
        self.assertEqual(refreshed, ["clients"])
        self.assertTrue(self.cache.has("clients"))

    def test_load_failure_sets_error_status(self) -> None:
        data = DataAccess(FailingStorage(), self.cache)
        with self.assertRaises(RuntimeError):
            data.collection("clients")
        self.assertEqual(self.cache.sync_status, "error")
        self.assertFalse(self.cache.has("clients"))

    def test_write_during_load_is_not_hidden_by_stale_fill(self) -> None:
        storage = SlowStorage()
        data = DataAccess(storage, self.cache)
        reader = threading.Thread(target=data.collection, args=("clients",))
        reader.start()
        self.assertTrue(storage.loaded.wait(timeout=5))

        data.create("clients", {"name": "Ann", "surname": "Lee", "phone": "1"})
        storage.release.set()
        reader.join(timeout=5)

        self.assertFalse(reader.is_alive())
        self.assertFalse(self.cache.has("clients"))
        self.assertEqual([c.name for c in data.collection("clients")], ["Ann"])

    def test_subscribers_hear_about_invalidation_on_write(self) -> None:
        events = []
        self.cache.subscribe("services", lambda key, value: events.append(value))
        self.data.collection("services")
        self.data.create(
            "services",
            {"name": "Wash", "price": 10.0, "duration_minutes": 15, "active": True},
        )
        self.assertEqual(events[0], [])
        self.assertIsNone(events[-1])
        self.assertEqual(
            [s.name for s in self.data.collection("services")],
            ["Wash"],
        )
        self.assertIsInstance(events[-1], list)


if __name__ == "__main__":
    unittest.main()
