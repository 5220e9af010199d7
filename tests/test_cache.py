from utils.cache import TTLCache

from tests.conftest import FakeClock


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(default_ttl=30, clock=clock)
    cache.set("duel", {"id": 1})

    clock.advance(30)
    assert cache.get("duel") == {"id": 1}
    clock.advance(1)
    assert cache.get("duel") is None
    assert not cache.has("duel")


def test_per_entry_ttl_and_default():
    clock = FakeClock()
    cache = TTLCache(default_ttl=30, clock=clock)
    cache.set("short", 1, ttl=5)
    cache.set("long", 2)

    clock.advance(10)
    assert cache.get("short", "gone") == "gone"
    assert cache.get("long") == 2


def test_has_handles_falsy_values():
    cache = TTLCache(clock=FakeClock())
    cache.set("zero", 0)
    assert cache.has("zero")


def test_cleanup_removes_only_expired():
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("a", 1)
    clock.advance(5)
    cache.set("b", 2)
    clock.advance(6)

    assert cache.cleanup() == 1
    assert len(cache) == 1
    assert cache.get("b") == 2


def test_delete_and_clear():
    cache = TTLCache(clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.delete("a")
    cache.delete("missing")
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
