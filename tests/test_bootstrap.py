from __future__ import annotations

import pytest

import storefront_cart.bootstrap as bootstrap_module
from storefront_cart.bootstrap import build_cart_service, build_cart_store
from storefront_cart.core.config import CatalogConfig, Settings, StorageConfig
from storefront_cart.integrations.redis_cart import InMemoryCartStore, RedisCartStore


def _settings(redis_url: str | None = None) -> Settings:
    return Settings(
        catalog=CatalogConfig(base_url="http://localhost:3333", timeout=1.0),
        storage=StorageConfig(redis_url=redis_url, key="test:cart", ttl_seconds=0),
        language="en",
        log_level="WARNING",
    )


class _PingingStore(RedisCartStore):
    reachable = True

    def __init__(self, redis_url, ttl_seconds=0):
        self.redis_url = redis_url

    def ping(self) -> bool:
        return self.reachable


def test_without_redis_url_uses_memory() -> None:
    assert isinstance(build_cart_store(_settings()), InMemoryCartStore)


def test_reachable_redis_is_used(monkeypatch) -> None:
    monkeypatch.setattr(bootstrap_module, "RedisCartStore", _PingingStore)

    store = build_cart_store(_settings("redis://localhost:6379/0"))

    assert isinstance(store, _PingingStore)


def test_unreachable_redis_falls_back_to_memory(monkeypatch) -> None:
    monkeypatch.setattr(bootstrap_module, "RedisCartStore", _PingingStore)
    monkeypatch.setattr(_PingingStore, "reachable", False)

    assert isinstance(build_cart_store(_settings("redis://localhost:6379/0")), InMemoryCartStore)


@pytest.mark.asyncio
async def test_build_cart_service_wires_callback_sink() -> None:
    received: list[str] = []

    service, catalog = build_cart_service(_settings(), notify=received.append)
    try:
        result = service.remove_item(1)
    finally:
        await catalog.close()

    assert not result.ok
    assert service.storage_key == "test:cart"
    assert received == ["Failed to remove product"]
