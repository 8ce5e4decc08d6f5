"""Durable cart storage: Redis-backed and in-memory key-value stores."""
from __future__ import annotations

from typing import Protocol

import redis

from storefront_cart.core.constants import CART_TTL_SECONDS, REDIS_SOCKET_TIMEOUT_SECONDS
from storefront_cart.core.exceptions import CartStorageException
from storefront_cart.logging_config import logger


class CartStore(Protocol):
    """Key-value surface holding the serialized cart."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class InMemoryCartStore:
    """Process-local store; contents are lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class RedisCartStore:
    """Cart store persisted in Redis, optionally with a TTL."""

    def __init__(
        self,
        redis_url: str | None = None,
        ttl_seconds: int = CART_TTL_SECONDS,
        client: redis.Redis | None = None,
    ):
        if client is None and not redis_url:
            raise CartStorageException("Redis URL is required for RedisCartStore")
        self._ttl_seconds = ttl_seconds
        self._client = client or redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
            socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        )

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as exc:
            logger.warning("Redis cart store ping failed: %s", exc)
            return False

    def read(self, key: str) -> str | None:
        try:
            raw = self._client.get(key)
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
        except (redis.RedisError, UnicodeDecodeError) as exc:
            raise CartStorageException(f"Failed to read cart {key!r}: {exc}") from exc
        return raw

    def write(self, key: str, value: str) -> None:
        try:
            if self._ttl_seconds > 0:
                self._client.setex(key, self._ttl_seconds, value)
            else:
                self._client.set(key, value)
        except redis.RedisError as exc:
            raise CartStorageException(f"Failed to write cart {key!r}: {exc}") from exc
