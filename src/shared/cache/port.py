"""Cache port — best-effort key/value store used by every domain cache.

The cache is never a correctness dependency. Backend failures on reads are
reported as misses and failures on writes are logged and dropped, so losing
the backend entirely only costs latency. Adapters implement the raw
``_get``/``_set``/``_delete``/``_exists`` operations and may raise freely;
the public methods here do the absorbing.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class CachePort(ABC):
    """Abstract interface for cache adapters."""

    name = "cache"

    # --- Raw backend operations ---

    @abstractmethod
    def _get(self, key: str) -> str | None: ...

    @abstractmethod
    def _set(self, key: str, value: str, ttl: int | None) -> None: ...

    @abstractmethod
    def _delete(self, key: str) -> None: ...

    @abstractmethod
    def _exists(self, key: str) -> bool: ...

    def _ping(self) -> bool:
        return True

    def _close(self) -> None:
        return None

    # --- Public, failure-absorbing operations ---

    def get(self, key: str) -> str | None:
        """Return the stored string, or None on a miss or backend failure."""
        try:
            return self._get(key)
        except Exception as exc:
            logger.warning("Cache read failed, treating as miss", adapter=self.name, key=key, error=str(exc))
            return None

    def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store ``value``; ``ttl`` in seconds, None or non-positive for no expiry.

        Returns False when the backend refused the write. Callers holding a
        value without expiry use this to drop the stale entry instead.
        """
        if ttl is not None and ttl <= 0:
            ttl = None
        try:
            self._set(key, value, ttl)
        except Exception as exc:
            logger.warning("Cache write failed, ignoring", adapter=self.name, key=key, error=str(exc))
            return False
        return True

    def delete(self, key: str) -> None:
        try:
            self._delete(key)
        except Exception as exc:
            logger.warning("Cache delete failed, ignoring", adapter=self.name, key=key, error=str(exc))

    def exists(self, key: str) -> bool:
        try:
            return bool(self._exists(key))
        except Exception as exc:
            logger.warning("Cache exists check failed, treating as miss", adapter=self.name, key=key, error=str(exc))
            return False

    def get_json(self, key: str) -> Any | None:
        """Decode a JSON value; undecodable payloads count as a miss."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("Cached payload is not valid JSON, treating as miss", key=key, error=str(exc))
            return None

    def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.warning("Value is not JSON serializable, not cached", key=key, error=str(exc))
            return False
        return self.set(key, payload, ttl)

    def ping(self) -> bool:
        try:
            return bool(self._ping())
        except Exception as exc:
            logger.warning("Cache ping failed", adapter=self.name, error=str(exc))
            return False

    def close(self) -> None:
        try:
            self._close()
        except Exception as exc:
            logger.warning("Cache close failed", adapter=self.name, error=str(exc))
