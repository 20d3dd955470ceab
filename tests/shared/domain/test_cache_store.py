"""Tests for the cache port contract using the in-memory adapter."""

import json

import pytest
from shared.cache.memory_adapter import MemoryCache
from shared.cache.port import CachePort


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class BrokenCache(CachePort):
    """Adapter whose backend is unreachable for every operation."""

    name = "broken"

    def _get(self, key):
        raise ConnectionError("backend down")

    def _set(self, key, value, ttl):
        raise ConnectionError("backend down")

    def _delete(self, key):
        raise ConnectionError("backend down")

    def _exists(self, key):
        raise ConnectionError("backend down")

    def _ping(self):
        raise ConnectionError("backend down")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache(clock=clock)


class TestGetSet:
    def test_set_then_get_returns_value(self, cache):
        cache.set("greeting", "hello")
        assert cache.get("greeting") == "hello"

    def test_get_missing_key_is_miss(self, cache):
        assert cache.get("missing") is None

    def test_set_overwrites(self, cache):
        cache.set("k", "one")
        cache.set("k", "two")
        assert cache.get("k") == "two"

    def test_accepted_write_returns_true(self, cache):
        assert cache.set("k", "v") is True


class TestDelete:
    def test_delete_then_get_is_miss(self, cache):
        cache.set("k", "v")
        cache.delete("k")
        assert cache.get("k") is None

    def test_delete_of_never_set_key_is_noop(self, cache):
        cache.delete("never-existed")
        assert cache.get("never-existed") is None


class TestExists:
    def test_exists_after_set(self, cache):
        cache.set("k", "v")
        assert cache.exists("k") is True

    def test_not_exists_for_missing(self, cache):
        assert cache.exists("k") is False


class TestExpiry:
    def test_value_expires_after_ttl(self, cache, clock):
        cache.set("k", "v", ttl=60)
        clock.advance(59)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert cache.exists("k") is False

    def test_no_ttl_never_expires(self, cache, clock):
        cache.set("k", "v")
        clock.advance(10**9)
        assert cache.get("k") == "v"
        assert cache.ttl("k") is None

    def test_non_positive_ttl_stores_without_expiry(self, cache, clock):
        cache.set("k", "v", ttl=0)
        clock.advance(10**6)
        assert cache.get("k") == "v"

    def test_remaining_ttl(self, cache, clock):
        cache.set("k", "v", ttl=3600)
        clock.advance(600)
        assert cache.ttl("k") == pytest.approx(3000)

    def test_expired_keys_are_not_listed(self, cache, clock):
        cache.set("short", "v", ttl=1)
        cache.set("long", "v")
        clock.advance(5)
        assert cache.keys() == ["long"]


class TestJson:
    def test_json_round_trip(self, cache):
        cache.set_json("k", {"ids": ["p1", "p2"], "count": 2})
        assert cache.get_json("k") == {"ids": ["p1", "p2"], "count": 2}

    def test_invalid_json_is_miss(self, cache):
        cache.set("k", "{not json")
        assert cache.get_json("k") is None

    def test_unserializable_value_is_not_cached(self, cache):
        assert cache.set_json("k", {"value": object()}) is False
        assert cache.get("k") is None

    def test_json_stored_as_text(self, cache):
        cache.set_json("k", [1, 2, 3])
        assert json.loads(cache.get("k")) == [1, 2, 3]


class TestBackendFailuresAreAbsorbed:
    def test_get_failure_is_miss(self):
        assert BrokenCache().get("k") is None

    def test_get_json_failure_is_miss(self):
        assert BrokenCache().get_json("k") is None

    def test_exists_failure_is_false(self):
        assert BrokenCache().exists("k") is False

    def test_set_failure_is_reported_not_raised(self):
        assert BrokenCache().set("k", "v", ttl=10) is False

    def test_set_json_failure_is_reported_not_raised(self):
        assert BrokenCache().set_json("k", ["p1"]) is False

    def test_delete_failure_is_silent(self):
        BrokenCache().delete("k")

    def test_ping_failure_is_false(self):
        assert BrokenCache().ping() is False

    def test_memory_cache_pings(self, cache):
        assert cache.ping() is True

    def test_close_clears_memory_cache(self, cache):
        cache.set("k", "v")
        cache.close()
        assert cache.get("k") is None
