"""In-process cache adapter for development and tests.

Entries live in a dictionary with an optional absolute expiry. The clock is
injectable so TTL behaviour can be tested without sleeping.
"""

import time
from collections.abc import Callable

from shared.cache.port import CachePort


class MemoryCache(CachePort):
    name = "memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float | None]] = {}

    def _live_entry(self, key: str) -> tuple[str, float | None] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            self._entries.pop(key, None)
            return None
        return entry

    def _get(self, key: str) -> str | None:
        entry = self._live_entry(key)
        return entry[0] if entry else None

    def _set(self, key: str, value: str, ttl: int | None) -> None:
        expires_at = self._clock() + ttl if ttl else None
        self._entries[key] = (value, expires_at)

    def _delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def _exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def _close(self) -> None:
        self._entries.clear()

    def ttl(self, key: str) -> float | None:
        """Seconds until ``key`` expires; None when absent or without expiry."""
        entry = self._live_entry(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self._clock()

    def keys(self) -> list[str]:
        return [key for key in list(self._entries) if self._live_entry(key) is not None]
