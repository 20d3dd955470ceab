"""Sequence store port — durable per-day counters for order numbering.

Adapters back a single shared table keyed by date key. ``increment`` is the
preferred atomic increment-and-fetch; the remaining operations support the
compare-and-swap fallback used when the atomic primitive is missing.
All operations raise ``StorageError`` when the backing store fails.
"""

from abc import ABC, abstractmethod


class SequenceStorePort(ABC):
    """Abstract interface for sequence store adapters."""

    name = "sequence-store"

    @abstractmethod
    def increment(self, date_key: str) -> int:
        """Atomically add one to the counter for ``date_key`` and return it.

        A missing counter starts at zero, so the first call returns 1.

        Raises:
            AtomicIncrementUnavailable: the store has no atomic primitive.
        """
        ...

    @abstractmethod
    def read(self, date_key: str) -> int | None:
        """Return the current counter, or None if no record exists yet."""
        ...

    @abstractmethod
    def insert_if_absent(self, date_key: str, value: int) -> bool:
        """Create the record with ``value``; False if it already exists."""
        ...

    @abstractmethod
    def compare_and_set(self, date_key: str, expected: int, new: int) -> bool:
        """Set the counter to ``new`` only if it still equals ``expected``."""
        ...

    def close(self) -> None:
        return None
