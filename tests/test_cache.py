import threading

from hotel_search.cache import DEFAULT_TTL_SECONDS, ResponseCache


def test_set_then_get_returns_value(cache):
    cache.set("k", [1, 2, 3])
    assert cache.get("k") == [1, 2, 3]


def test_missing_key_returns_none(cache):
    assert cache.get("nope") is None


def test_entry_expires_after_ttl(cache, clock):
    cache.set("k", "v", ttl_seconds=60)
    clock.advance(59)
    assert cache.get("k") == "v"

    clock.advance(1)
    assert cache.get("k") is None
    # expired entry is removed on lookup
    assert "k" not in cache

    cache.set("k", "fresh", ttl_seconds=60)
    assert cache.get("k") == "fresh"


def test_default_ttl_is_twelve_hours(clock):
    cache = ResponseCache(clock=clock)
    assert cache.ttl_seconds == DEFAULT_TTL_SECONDS == 43200

    cache.set("k", "v")
    clock.advance(43199)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_set_overwrites(cache):
    cache.set("k", "old")
    cache.set("k", "new")
    assert cache.get("k") == "new"
    assert len(cache) == 1


def test_delete_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert len(cache) == 0


class CountingLock:
    def __init__(self):
        self.acquired = 0
        self._lock = threading.Lock()

    def __enter__(self):
        self.acquired += 1
        return self._lock.__enter__()

    def __exit__(self, *exc):
        return self._lock.__exit__(*exc)


def test_len_and_contains_take_the_lock(cache):
    cache.set("k", "v")
    lock = CountingLock()
    cache._lock = lock

    assert len(cache) == 1
    assert "k" in cache
    assert lock.acquired == 2
