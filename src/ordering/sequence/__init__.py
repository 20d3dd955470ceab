"""Sequence generator factory.

Provides get_sequence_generator() / set_sequence_store() /
reset_sequence_generator() over one process-wide store:
- MemorySequenceStore for development and testing (default)
- SqlAlchemySequenceStore for shared databases (SEQUENCE_ADAPTER=sqlalchemy)

The sequence store is configured independently of the cache store; one
failing says nothing about the other.
"""

from ordering.sequence.exceptions import (
    AtomicIncrementUnavailable,
    RaceExhausted,
    SequenceError,
    StorageError,
)
from ordering.sequence.generator import OrderNumber, SequenceGenerator, date_key_for
from ordering.sequence.port import SequenceStorePort
from shared.settings import get_settings

_store_instance: SequenceStorePort | None = None
_generator_instance: SequenceGenerator | None = None


def _build_store() -> SequenceStorePort:
    settings = get_settings()
    if settings.sequence_adapter == "memory":
        from ordering.sequence.memory_adapter import MemorySequenceStore

        return MemorySequenceStore()
    if settings.sequence_adapter == "sqlalchemy":
        from ordering.sequence.sqlalchemy_adapter import SqlAlchemySequenceStore

        store = SqlAlchemySequenceStore.from_uri(settings.sequence_database_uri)
        store.create_schema()
        return store
    raise ValueError(f"Unknown sequence adapter: {settings.sequence_adapter}")


def get_sequence_store() -> SequenceStorePort:
    global _store_instance
    if _store_instance is None:
        _store_instance = _build_store()
    return _store_instance


def set_sequence_store(store: SequenceStorePort) -> None:
    """Override the active sequence store (useful for tests)."""
    global _store_instance, _generator_instance
    _store_instance = store
    _generator_instance = None


def get_sequence_generator() -> SequenceGenerator:
    """Return the process-wide generator, built from settings on first use."""
    global _generator_instance
    if _generator_instance is None:
        settings = get_settings()
        _generator_instance = SequenceGenerator(
            get_sequence_store(),
            prefix=settings.order_number_prefix,
            width=settings.order_number_width,
            max_attempts=settings.sequence_max_attempts,
            base_delay=settings.sequence_base_delay,
        )
    return _generator_instance


def reset_sequence_generator() -> None:
    """Close the store and drop both singletons."""
    global _store_instance, _generator_instance
    if _store_instance is not None:
        _store_instance.close()
    _store_instance = None
    _generator_instance = None


__all__ = [
    "AtomicIncrementUnavailable",
    "OrderNumber",
    "RaceExhausted",
    "SequenceError",
    "SequenceGenerator",
    "SequenceStorePort",
    "StorageError",
    "date_key_for",
    "get_sequence_generator",
    "get_sequence_store",
    "reset_sequence_generator",
    "set_sequence_store",
]
