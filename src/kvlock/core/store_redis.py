"""Redis adapter for the lock store interface."""

from __future__ import annotations

import os
from typing import Optional

from redis import Redis

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisStore:
    """Maps the store primitives onto SETNX, GET, GETSET and DEL.

    Connection errors raised by redis-py are left to propagate.
    """

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    @classmethod
    def from_url(cls, url: Optional[str] = None, **kwargs) -> "RedisStore":
        kwargs.setdefault("decode_responses", True)
        return cls(Redis.from_url(url or os.getenv("REDIS_URL", DEFAULT_REDIS_URL), **kwargs))

    @property
    def client(self) -> Redis:
        return self._redis

    def set_if_absent(self, key: str, value: str) -> bool:
        return bool(self._redis.setnx(key, value))

    def get(self, key: str) -> Optional[str]:
        return _text(self._redis.get(key))

    def swap(self, key: str, value: str) -> Optional[str]:
        return _text(self._redis.getset(key, value))

    def delete(self, key: str) -> bool:
        return bool(self._redis.delete(key))

    def close(self) -> None:
        self._redis.close()


def _text(value) -> Optional[str]:
    # Clients built without decode_responses hand back bytes.
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
