"""In-memory sequence store for development and tests.

Stands in for the shared database table. Every operation is atomic with
respect to the store, as a row update in the real table would be, so many
threads can share one instance the way many processes share one database.
"""

import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from ordering.sequence.exceptions import AtomicIncrementUnavailable, StorageError
from ordering.sequence.port import SequenceStorePort


@dataclass
class SequenceRecord:
    date_key: str
    counter: int
    last_updated: datetime


class MemorySequenceStore(SequenceStorePort):
    name = "memory"

    def __init__(self, supports_atomic_increment: bool = True):
        self.supports_atomic_increment = supports_atomic_increment
        self.available = True
        self.failure_reason = "Sequence store unavailable"
        self._records: dict[str, SequenceRecord] = {}
        self._guard = threading.Lock()

    def configure(
        self,
        supports_atomic_increment: bool = True,
        available: bool = True,
        failure_reason: str = "Sequence store unavailable",
    ):
        """Configure the fake store behavior for testing."""
        self.supports_atomic_increment = supports_atomic_increment
        self.available = available
        self.failure_reason = failure_reason

    def _check_available(self):
        if not self.available:
            raise StorageError(self.failure_reason)

    def _write(self, date_key: str, counter: int) -> None:
        self._records[date_key] = SequenceRecord(date_key, counter, datetime.now(UTC))

    def increment(self, date_key: str) -> int:
        self._check_available()
        if not self.supports_atomic_increment:
            raise AtomicIncrementUnavailable(f"{self.name} store configured without atomic increment")
        with self._guard:
            record = self._records.get(date_key)
            counter = (record.counter if record else 0) + 1
            self._write(date_key, counter)
            return counter

    def read(self, date_key: str) -> int | None:
        self._check_available()
        record = self._records.get(date_key)
        return record.counter if record else None

    def insert_if_absent(self, date_key: str, value: int) -> bool:
        self._check_available()
        with self._guard:
            if date_key in self._records:
                return False
            self._write(date_key, value)
            return True

    def compare_and_set(self, date_key: str, expected: int, new: int) -> bool:
        self._check_available()
        with self._guard:
            record = self._records.get(date_key)
            if record is None or record.counter != expected:
                return False
            self._write(date_key, new)
            return True

    def record(self, date_key: str) -> SequenceRecord | None:
        return self._records.get(date_key)
