"""Cache store factory.

Provides get_cache() / set_cache() / shutdown_cache() around a single
process-wide cache adapter:
- MemoryCache for development and testing (default)
- RedisCache for shared deployments (CACHE_ADAPTER=redis)
"""

import structlog

from shared.cache.port import CachePort
from shared.settings import get_settings

logger = structlog.get_logger(__name__)

_cache_instance: CachePort | None = None


def get_cache() -> CachePort:
    """Return the configured cache adapter, creating it on first use."""
    global _cache_instance
    if _cache_instance is None:
        settings = get_settings()
        if settings.cache_adapter == "memory":
            from shared.cache.memory_adapter import MemoryCache

            _cache_instance = MemoryCache()
        elif settings.cache_adapter == "redis":
            from shared.cache.redis_adapter import RedisCache

            _cache_instance = RedisCache.from_url(settings.redis_url)
        else:
            raise ValueError(f"Unknown cache adapter: {settings.cache_adapter}")
        logger.info("Cache store initialised", adapter=_cache_instance.name)
    return _cache_instance


def set_cache(cache: CachePort) -> None:
    """Override the active cache adapter (useful for tests)."""
    global _cache_instance
    _cache_instance = cache


def shutdown_cache() -> None:
    """Close the active adapter and forget it; the next get_cache() rebuilds."""
    global _cache_instance
    if _cache_instance is not None:
        _cache_instance.close()
        _cache_instance = None


__all__ = ["CachePort", "get_cache", "set_cache", "shutdown_cache"]
