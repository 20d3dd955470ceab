import os

import pytest


@pytest.fixture(scope="session")
def _ordering_domain(request):
    """Initialize the ordering domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(scope="session", autouse=True)
def setup_db(_ordering_domain):
    from shared.db import drop_db, setup_db

    setup_db(_ordering_domain)

    yield

    drop_db(_ordering_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture
def sequence_store():
    """A fresh in-memory sequence store installed as the process-wide store."""
    from ordering.sequence import set_sequence_store
    from ordering.sequence.memory_adapter import MemorySequenceStore

    store = MemorySequenceStore()
    set_sequence_store(store)
    return store
