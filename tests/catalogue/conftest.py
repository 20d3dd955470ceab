import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def setup_db(_catalogue_domain):
    from shared.db import drop_db, setup_db

    setup_db(_catalogue_domain)

    yield

    drop_db(_catalogue_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture
def cache():
    """A fresh in-memory cache installed as the process-wide cache store."""
    from shared.cache import set_cache
    from shared.cache.memory_adapter import MemoryCache

    store = MemoryCache()
    set_cache(store)
    return store


@pytest.fixture
def refusing_cache():
    """An in-memory cache that starts refusing writes once ``refuse_writes`` is set; reads keep working."""
    from shared.cache import set_cache
    from shared.cache.memory_adapter import MemoryCache

    class WriteRefusingCache(MemoryCache):
        name = "refusing"
        refuse_writes = False

        def _set(self, key, value, ttl):
            if self.refuse_writes:
                raise ConnectionError("write refused")
            super()._set(key, value, ttl)

    store = WriteRefusingCache()
    set_cache(store)
    return store
