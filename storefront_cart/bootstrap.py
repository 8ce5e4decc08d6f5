"""Application bootstrap wiring catalog client, cart store, sink and service."""
from __future__ import annotations

from collections.abc import Callable

from storefront_cart.core.config import Settings, load_settings
from storefront_cart.core.exceptions import CartStorageException
from storefront_cart.integrations.catalog_api import HttpCatalogClient
from storefront_cart.integrations.redis_cart import CartStore, InMemoryCartStore, RedisCartStore
from storefront_cart.logging_config import logger, setup_logging
from storefront_cart.services.cart_service import CartService
from storefront_cart.services.notifications import (
    CallbackNotificationSink,
    LoggingNotificationSink,
    NotificationSink,
)


def build_cart_store(settings: Settings) -> CartStore:
    """Redis when configured and reachable, otherwise process memory."""
    if settings.redis_url:
        try:
            store = RedisCartStore(settings.redis_url, ttl_seconds=settings.storage.ttl_seconds)
        except CartStorageException as exc:
            logger.warning("Failed to initialize Redis cart store, using memory: %s", exc)
            return InMemoryCartStore()
        if store.ping():
            logger.info("Using Redis for cart storage")
            return store
        logger.warning("Redis is unreachable, cart will not survive restarts")
        return InMemoryCartStore()

    logger.info("REDIS_URL is not set, cart will not survive restarts")
    return InMemoryCartStore()


def build_cart_service(
    settings: Settings | None = None,
    notify: Callable[[str], object] | None = None,
) -> tuple[CartService, HttpCatalogClient]:
    """Create a session cart from configuration.

    Returns the service and its catalog client; the caller owns the client
    and should ``await client.close()`` at shutdown.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    catalog = HttpCatalogClient(settings.catalog.base_url, timeout=settings.catalog.timeout)
    sink: NotificationSink = (
        CallbackNotificationSink(notify) if notify else LoggingNotificationSink()
    )
    service = CartService.create(
        catalog,
        build_cart_store(settings),
        sink,
        storage_key=settings.storage.key,
        language=settings.language,
    )
    return service, catalog
