"""
Catalog/inventory HTTP client.

Reads ``GET {base_url}/stock/{id}`` and ``GET {base_url}/products/{id}``.
Every failure surfaces as a ``CatalogException``; nothing is retried.
"""
from __future__ import annotations

import asyncio
from typing import Any, Protocol

import aiohttp

from storefront_cart.core.constants import (
    CATALOG_TIMEOUT_SECONDS,
    PRODUCTS_PATH,
    STOCK_PATH,
)
from storefront_cart.core.exceptions import (
    CatalogUnavailableException,
    ProductNotFoundException,
)
from storefront_cart.domain.cart import Product, Stock
from storefront_cart.logging_config import logger


class CatalogClient(Protocol):
    """Read-only access to product records and stock levels."""

    async def get_stock(self, product_id: int) -> Stock: ...

    async def get_product(self, product_id: int) -> Product: ...


class HttpCatalogClient:
    """Catalog client backed by an aiohttp session."""

    def __init__(self, base_url: str, timeout: float = CATALOG_TIMEOUT_SECONDS):
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request_json(self, resource: str, product_id: int) -> dict[str, Any]:
        url = f"{self._base_url}/{resource}/{int(product_id)}"
        session = await self._get_session()
        try:
            async with session.get(url) as resp:
                if resp.status == 404:
                    raise ProductNotFoundException(product_id, resource)
                if resp.status != 200:
                    raise CatalogUnavailableException(
                        f"GET {url} returned HTTP {resp.status}"
                    )
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.warning("Catalog request %s failed: %s", url, exc)
            raise CatalogUnavailableException(f"GET {url} failed: {exc}") from exc

        if not isinstance(data, dict):
            raise CatalogUnavailableException(f"GET {url} returned unexpected payload")
        return data

    async def get_stock(self, product_id: int) -> Stock:
        data = await self._request_json(STOCK_PATH, product_id)
        try:
            return Stock.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogUnavailableException(
                f"Malformed stock record for product {product_id}"
            ) from exc

    async def get_product(self, product_id: int) -> Product:
        data = await self._request_json(PRODUCTS_PATH, product_id)
        try:
            product = Product.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogUnavailableException(
                f"Malformed product record for product {product_id}"
            ) from exc
        if product.id != int(product_id):
            raise CatalogUnavailableException(
                f"Catalog returned product {product.id} for id {product_id}"
            )
        return product
