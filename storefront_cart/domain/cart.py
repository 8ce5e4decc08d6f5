"""Cart entities and mutation results."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class CartError(str, Enum):
    """Why a cart mutation was rejected."""

    INSUFFICIENT_STOCK = "insufficient_stock"
    INVALID_AMOUNT = "invalid_amount"
    ITEM_NOT_FOUND = "item_not_found"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True, slots=True)
class Product:
    """Catalog record for a product."""

    id: int
    title: str
    price: float
    image: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": int(self.id),
            "title": self.title,
            "price": self.price,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            price=float(data.get("price", 0)),
            image=str(data.get("image", "")),
        )


@dataclass(frozen=True, slots=True)
class Stock:
    """Units of a product currently available."""

    id: int
    amount: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Stock:
        return cls(id=int(data["id"]), amount=int(data["amount"]))


@dataclass(frozen=True, slots=True)
class CartItem:
    """A product in the cart together with the requested amount."""

    product: Product
    amount: int

    @property
    def id(self) -> int:
        return self.product.id

    def with_amount(self, amount: int) -> CartItem:
        return replace(self, amount=amount)

    def to_dict(self) -> dict[str, Any]:
        """Flatten product fields and amount into one record."""
        data = self.product.to_dict()
        data["amount"] = int(self.amount)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartItem:
        amount = data["amount"]
        # 1.9 or true in storage is corrupt, not truncated
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise ValueError(f"Cart amount must be an integer, got {amount!r}")
        return cls(product=Product.from_dict(data), amount=amount)


@dataclass(frozen=True, slots=True)
class CartMutationResult:
    """Outcome of a cart operation.

    ``items`` is the cart after the call; it equals the cart before the
    call whenever ``ok`` is false.
    """

    ok: bool
    items: tuple[CartItem, ...]
    error: CartError | None = None
    message: str | None = None

    @classmethod
    def success(cls, items: tuple[CartItem, ...]) -> CartMutationResult:
        return cls(True, items)

    @classmethod
    def failure(
        cls, items: tuple[CartItem, ...], error: CartError, message: str
    ) -> CartMutationResult:
        return cls(False, items, error, message)
