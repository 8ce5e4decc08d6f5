"""Shared pytest fixtures: fake catalog, in-memory store, recording sink."""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from storefront_cart.core.exceptions import (
    CartStorageException,
    CatalogUnavailableException,
    ProductNotFoundException,
)
from storefront_cart.domain.cart import CartItem, Product, Stock
from storefront_cart.integrations.redis_cart import InMemoryCartStore
from storefront_cart.services.cart_service import CartService
from storefront_cart.services.notifications import RecordingNotificationSink


def make_product(product_id: int) -> Product:
    return Product(
        id=product_id,
        title=f"Sneaker {product_id}",
        price=100.0 + product_id,
        image=f"https://cdn.example.com/sneaker-{product_id}.jpg",
    )


def make_item(product_id: int, amount: int) -> CartItem:
    return CartItem(product=make_product(product_id), amount=amount)


@dataclass
class FakeCatalog:
    stock: dict[int, int] = field(default_factory=dict)
    products: dict[int, Product] = field(default_factory=dict)
    stock_down: bool = False
    products_down: bool = False
    calls: list[tuple[str, int]] = field(default_factory=list)

    async def get_stock(self, product_id: int) -> Stock:
        self.calls.append(("stock", product_id))
        if self.stock_down:
            raise CatalogUnavailableException("stock service down")
        if product_id not in self.stock:
            raise ProductNotFoundException(product_id, "stock")
        return Stock(id=product_id, amount=self.stock[product_id])

    async def get_product(self, product_id: int) -> Product:
        self.calls.append(("product", product_id))
        if self.products_down:
            raise CatalogUnavailableException("catalog service down")
        if product_id not in self.products:
            raise ProductNotFoundException(product_id)
        return self.products[product_id]


class FakeStore(InMemoryCartStore):
    """In-memory store that counts writes and can be switched to failing."""

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__(initial)
        self.fail_writes = False
        self.writes = 0

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise CartStorageException("disk full")
        self.writes += 1
        super().write(key, value)


@pytest.fixture
def catalog() -> FakeCatalog:
    products = {pid: make_product(pid) for pid in (1, 2, 3)}
    return FakeCatalog(stock={1: 5, 2: 2, 3: 0}, products=products)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def service(catalog: FakeCatalog, store: FakeStore, sink: RecordingNotificationSink) -> CartService:
    return CartService.create(catalog, store, sink, language="en")
