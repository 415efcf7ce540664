from __future__ import annotations

import pytest

from src.activation_system.activation_system.cache.cached_store import CachedDocumentStore
from src.activation_system.activation_system.cache.ttl_cache import TTLCache
from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingStore(InMemoryDocumentStore):
    def __init__(self, seed=None):
        super().__init__(seed)
        self.reads = 0

    def get_all(self, collection):
        self.reads += 1
        return super().get_all(collection)


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(60, clock=clock)
    cache.set("campaigns", [1, 2])

    clock.now += 59
    assert cache.get("campaigns") == [1, 2]

    clock.now += 1
    assert cache.get("campaigns") is None
    assert cache.is_fresh("campaigns") is False


def test_get_or_load_calls_loader_once_while_fresh():
    cache = TTLCache(60, clock=FakeClock())
    calls = []

    def loader():
        calls.append(1)
        return ["x"]

    assert cache.get_or_load("users", loader) == ["x"]
    assert cache.get_or_load("users", loader) == ["x"]
    assert len(calls) == 1


def test_invalidate_and_summary():
    cache = TTLCache(60, clock=FakeClock())
    cache.set("users", [1, 2, 3])
    cache.set("user", {"id": "u1"})

    assert cache.summary() == {"users": "3 items", "user": "dict"}

    cache.invalidate("users")
    assert cache.get("users") is None
    cache.clear()
    assert cache.summary() == {}


def test_ttl_must_be_positive():
    with pytest.raises(ValueError):
        TTLCache(0)


def test_cached_store_reads_through_and_writes_invalidate():
    inner = CountingStore({"campaigns": [{"id": "c1", "name": "Launch"}]})
    store = CachedDocumentStore(inner, TTLCache(60, clock=FakeClock()))

    assert [c["name"] for c in store.get_all("campaigns")] == ["Launch"]
    assert store.get("campaigns", "c1")["name"] == "Launch"
    assert inner.reads == 1

    new_id = store.add("campaigns", {"name": "Promo"})
    assert {c["id"] for c in store.get_all("campaigns")} == {"c1", new_id}
    assert inner.reads == 2

    store.update("campaigns", "c1", {"name": "Launch 2"})
    assert store.find("campaigns", "name", "Launch 2")[0]["id"] == "c1"

    store.delete("campaigns", new_id)
    assert [c["id"] for c in store.get_all("campaigns")] == ["c1"]
    assert inner.reads == 4


def test_cached_documents_are_copies():
    store = CachedDocumentStore(InMemoryDocumentStore({"users": [{"id": "u1", "name": "A"}]}), TTLCache(60))

    store.get_all("users")[0]["name"] = "mutated"

    assert store.get_all("users")[0]["name"] == "A"


def test_expired_entry_dropped_by_another_request_is_a_miss():
    cache = None
    now = [1000.0]

    def clock():
        # Another request notices the same expiry and removes the entry first.
        if now[0] > 1000.0:
            cache.invalidate("users")
        return now[0]

    cache = TTLCache(60, clock=clock)
    cache.set("users", ["a"])
    now[0] += 120

    assert cache.get("users") is None
    assert cache.summary() == {}
