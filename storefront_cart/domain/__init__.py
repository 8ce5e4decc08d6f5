"""Cart domain model and rules."""
from __future__ import annotations

from .cart import CartError, CartItem, CartMutationResult, Product, Stock

__all__ = [
    "CartError",
    "CartItem",
    "CartMutationResult",
    "Product",
    "Stock",
]
