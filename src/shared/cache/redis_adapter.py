"""Redis cache adapter.

Uses a synchronous ``redis-py`` client with decoded responses. Connection and
timeout errors surface from the raw operations and are absorbed by the port.
"""

import redis

from shared.cache.port import CachePort


class RedisCache(CachePort):
    name = "redis"

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 2.0) -> "RedisCache":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            retry_on_timeout=False,
        )
        return cls(client)

    def _get(self, key: str) -> str | None:
        return self.client.get(key)

    def _set(self, key: str, value: str, ttl: int | None) -> None:
        if ttl:
            self.client.set(key, value, ex=ttl)
        else:
            self.client.set(key, value)

    def _delete(self, key: str) -> None:
        self.client.delete(key)

    def _exists(self, key: str) -> bool:
        return self.client.exists(key) == 1

    def _ping(self) -> bool:
        return self.client.ping()

    def _close(self) -> None:
        self.client.close()
