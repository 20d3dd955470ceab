"""Tests for the process-wide cache store factory."""

from unittest.mock import patch

import pytest
from shared.cache import get_cache, set_cache, shutdown_cache
from shared.cache.memory_adapter import MemoryCache
from shared.cache.redis_adapter import RedisCache
from shared.settings import Settings, set_settings


class TestGetCache:
    def test_defaults_to_memory(self):
        set_settings(Settings())
        assert isinstance(get_cache(), MemoryCache)

    def test_returns_same_instance(self):
        set_settings(Settings())
        assert get_cache() is get_cache()

    def test_redis_adapter_from_settings(self):
        set_settings(Settings(cache_adapter="redis", redis_url="redis://cache:6379/2"))
        with patch("shared.cache.redis_adapter.redis.Redis.from_url") as from_url:
            cache = get_cache()

        assert isinstance(cache, RedisCache)
        assert from_url.call_args.args[0] == "redis://cache:6379/2"


class TestOverrideAndShutdown:
    def test_set_cache_overrides(self):
        custom = MemoryCache()
        set_cache(custom)
        assert get_cache() is custom

    def test_shutdown_closes_and_forgets(self):
        set_settings(Settings())
        first = get_cache()
        first.set("k", "v")

        shutdown_cache()

        assert first.get("k") is None
        assert get_cache() is not first

    def test_shutdown_without_cache_is_noop(self):
        shutdown_cache()
        shutdown_cache()


@pytest.mark.parametrize("adapter", ["memory", "redis"])
def test_cache_and_sequence_stores_are_independent(adapter):
    from ordering.sequence import get_sequence_store
    from ordering.sequence.memory_adapter import MemorySequenceStore

    set_settings(Settings(cache_adapter=adapter))
    with patch("shared.cache.redis_adapter.redis.Redis.from_url"):
        get_cache()

    assert isinstance(get_sequence_store(), MemorySequenceStore)
