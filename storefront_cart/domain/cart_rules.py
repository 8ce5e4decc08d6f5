"""Cart state rules: serialization, stock checks and copy-on-write updates.

Everything here is pure; external reads happen in the cart service.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence

from storefront_cart.core.constants import MIN_ITEM_AMOUNT
from storefront_cart.domain.cart import CartError, CartItem, Product, Stock
from storefront_cart.logging_config import logger

CartState = tuple[CartItem, ...]


@dataclass(frozen=True, slots=True)
class IncrementItem:
    """Decision: bump the amount of ``product_id`` by one."""

    product_id: int


@dataclass(frozen=True, slots=True)
class AppendItem:
    """Decision: append ``product`` with amount 1, or bump it if already present."""

    product: Product


@dataclass(frozen=True, slots=True)
class SetItemAmount:
    """Decision: set the amount of ``product_id``."""

    product_id: int
    amount: int


@dataclass(frozen=True, slots=True)
class RemoveItem:
    """Decision: drop the item at ``index`` of the current cart."""

    index: int


CartDecision = IncrementItem | AppendItem | SetItemAmount | RemoveItem


def serialize_cart(items: Sequence[CartItem]) -> str:
    """Serialize cart to the durable format: ordered list of flat records."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def deserialize_cart(raw: str | None) -> CartState:
    """Restore cart from the durable format.

    Missing or corrupt entries produce an empty cart. Records repeating a
    product id after its first occurrence are dropped.
    """
    if not raw:
        return ()
    try:
        records = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Corrupted cart entry, starting with empty cart: %s", exc)
        return ()
    if not isinstance(records, list):
        logger.warning("Cart entry is not a list, starting with empty cart")
        return ()

    items: list[CartItem] = []
    seen: set[int] = set()
    for record in records:
        item = _item_from_record(record)
        if item is None:
            logger.warning("Corrupted cart entry, starting with empty cart: %r", record)
            return ()
        if item.id in seen:
            logger.warning("Duplicate product %s in stored cart, keeping first", item.id)
            continue
        seen.add(item.id)
        items.append(item)
    return tuple(items)


def _item_from_record(record: Any) -> CartItem | None:
    if not isinstance(record, dict):
        return None
    try:
        item = CartItem.from_dict(record)
    except (KeyError, TypeError, ValueError):
        return None
    if item.amount < MIN_ITEM_AMOUNT:
        return None
    return item


def normalize_product_id(value: Any) -> int | None:
    """Catalog ids are ints; digit strings are accepted, anything else is not an id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def find_index(items: Sequence[CartItem], product_id: int) -> int | None:
    for index, item in enumerate(items):
        if item.id == product_id:
            return index
    return None


def is_valid_amount(amount: Any) -> bool:
    # bool is an int subclass, but True is not a quantity
    return isinstance(amount, int) and not isinstance(amount, bool) and amount >= MIN_ITEM_AMOUNT


def check_stock(stock: Stock, requested: int) -> CartError | None:
    if stock.amount < requested:
        return CartError.INSUFFICIENT_STOCK
    return None


def apply_decision(items: CartState, decision: CartDecision) -> CartState | None:
    """Build the next cart state from the current one; ``items`` is never modified.

    Returns None when the item the decision targets is no longer in the cart.
    """
    if isinstance(decision, AppendItem):
        index = find_index(items, decision.product.id)
        if index is None:
            return (*items, CartItem(product=decision.product, amount=1))
        decision = IncrementItem(decision.product.id)

    updated = list(items)
    if isinstance(decision, IncrementItem):
        index = find_index(updated, decision.product_id)
        if index is None:
            return None
        updated[index] = updated[index].with_amount(updated[index].amount + 1)
    elif isinstance(decision, SetItemAmount):
        index = find_index(updated, decision.product_id)
        if index is None:
            return None
        updated[index] = updated[index].with_amount(decision.amount)
    elif isinstance(decision, RemoveItem):
        if not 0 <= decision.index < len(updated):
            return None
        del updated[decision.index]
    else:
        raise TypeError(f"Unknown cart decision: {decision!r}")
    return tuple(updated)
