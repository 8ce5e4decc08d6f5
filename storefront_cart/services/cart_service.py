"""Cart state container: stock-aware mutations with eager persistence."""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from storefront_cart.core.constants import CART_STORAGE_KEY
from storefront_cart.core.exceptions import CartStorageException
from storefront_cart.domain.cart import CartError, CartItem, CartMutationResult
from storefront_cart.domain.cart_rules import (
    AppendItem,
    CartDecision,
    CartState,
    IncrementItem,
    RemoveItem,
    SetItemAmount,
    apply_decision,
    check_stock,
    deserialize_cart,
    find_index,
    is_valid_amount,
    normalize_product_id,
    serialize_cart,
)
from storefront_cart.integrations.catalog_api import CatalogClient
from storefront_cart.integrations.redis_cart import CartStore
from storefront_cart.logging_config import logger
from storefront_cart.services.notifications import (
    CartOperation,
    NotificationSink,
    failure_message,
)


class CartService:
    """
    Holds one session's cart and is the only writer of its stored copy.

    Each mutation runs in two phases:
    - validate: all catalog/inventory reads, returns a decision or an error
    - commit: builds the next tuple, swaps it in memory, then writes the store

    Operations never raise. Failures are reported once through the sink and
    returned as ``CartMutationResult`` with the cart left unchanged.

    Example:
    ```python
    service = CartService.create(catalog, store, LoggingNotificationSink())
    result = await service.add_item(1)
    if not result.ok:
        print(result.error, result.message)
    ```
    """

    def __init__(
        self,
        catalog: CatalogClient,
        store: CartStore,
        sink: NotificationSink,
        *,
        storage_key: str = CART_STORAGE_KEY,
        language: str | None = None,
        items: Iterable[CartItem] = (),
    ):
        self._catalog = catalog
        self._store = store
        self._sink = sink
        self._storage_key = storage_key
        self._language = language
        self._items: CartState = tuple(items)

    @classmethod
    def create(
        cls,
        catalog: CatalogClient,
        store: CartStore,
        sink: NotificationSink,
        *,
        storage_key: str = CART_STORAGE_KEY,
        language: str | None = None,
    ) -> CartService:
        """Build a service whose cart is restored from the store."""
        service = cls(catalog, store, sink, storage_key=storage_key, language=language)
        service.reload()
        return service

    # ---- read access ----

    @property
    def items(self) -> CartState:
        return self._items

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def total_units(self) -> int:
        return sum(item.amount for item in self._items)

    def find_item(self, product_id: int) -> CartItem | None:
        normalized = normalize_product_id(product_id)
        index = None if normalized is None else find_index(self._items, normalized)
        return None if index is None else self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def reload(self) -> CartState:
        """Replace the in-memory cart with the stored copy."""
        try:
            raw = self._store.read(self._storage_key)
        except CartStorageException as exc:
            logger.warning("Could not read stored cart, starting empty: %s", exc)
            raw = None
        self._items = deserialize_cart(raw)
        logger.debug("Cart loaded with %s items", len(self._items))
        return self._items

    # ---- mutations ----

    async def add_item(self, product_id: int) -> CartMutationResult:
        """Add one unit of ``product_id``, appending it if not yet in the cart."""
        normalized = normalize_product_id(product_id)
        if normalized is None:
            return self._reject(CartOperation.ADD, product_id, CartError.TRANSPORT_FAILURE)
        try:
            outcome = await self._validate_add(self._items, normalized)
        except Exception as exc:
            logger.warning("add_item(%s) failed on catalog lookup: %s", normalized, exc)
            outcome = CartError.TRANSPORT_FAILURE
        return self._finish(CartOperation.ADD, normalized, outcome)

    def remove_item(self, product_id: int) -> CartMutationResult:
        """Remove the entry for ``product_id``."""
        normalized = normalize_product_id(product_id)
        index = None if normalized is None else find_index(self._items, normalized)
        outcome: CartDecision | CartError = (
            CartError.ITEM_NOT_FOUND if index is None else RemoveItem(index)
        )
        return self._finish(CartOperation.REMOVE, product_id, outcome)

    async def set_item_amount(self, product_id: int, amount: int) -> CartMutationResult:
        """Set the absolute amount of an item already in the cart."""
        if not is_valid_amount(amount):
            return self._reject(CartOperation.SET_AMOUNT, product_id, CartError.INVALID_AMOUNT)
        normalized = normalize_product_id(product_id)
        if normalized is None:
            return self._reject(CartOperation.SET_AMOUNT, product_id, CartError.ITEM_NOT_FOUND)
        try:
            outcome = await self._validate_set_amount(self._items, normalized, amount)
        except Exception as exc:
            logger.warning("set_item_amount(%s) failed on stock lookup: %s", normalized, exc)
            outcome = CartError.TRANSPORT_FAILURE
        return self._finish(CartOperation.SET_AMOUNT, normalized, outcome)

    # ---- validate phase ----

    async def _validate_add(
        self, snapshot: CartState, product_id: int
    ) -> CartDecision | CartError:
        index = find_index(snapshot, product_id)
        current_amount = 0 if index is None else snapshot[index].amount

        stock = await self._catalog.get_stock(product_id)
        error = check_stock(stock, current_amount + 1)
        if error:
            return error

        if index is not None:
            return IncrementItem(product_id)
        product = await self._catalog.get_product(product_id)
        return AppendItem(product)

    async def _validate_set_amount(
        self, snapshot: CartState, product_id: int, amount: int
    ) -> CartDecision | CartError:
        index = find_index(snapshot, product_id)
        if index is None:
            return CartError.ITEM_NOT_FOUND

        stock = await self._catalog.get_stock(product_id)
        error = check_stock(stock, amount)
        if error:
            return error
        return SetItemAmount(product_id, amount)

    # ---- commit phase ----

    def _finish(
        self,
        operation: CartOperation,
        product_id: int,
        outcome: CartDecision | CartError,
    ) -> CartMutationResult:
        if isinstance(outcome, CartError):
            return self._reject(operation, product_id, outcome)
        updated = apply_decision(self._items, outcome)
        if updated is None:
            # target left the cart while validation was suspended
            return self._reject(operation, product_id, CartError.ITEM_NOT_FOUND)
        try:
            self._commit(updated)
        except Exception as exc:
            logger.warning("%s(%s) could not persist cart: %s", operation.value, product_id, exc)
            return self._reject(operation, product_id, CartError.TRANSPORT_FAILURE)
        return CartMutationResult.success(self._items)

    def _commit(self, updated: CartState) -> None:
        previous = self._items
        self._items = updated
        try:
            self._store.write(self._storage_key, serialize_cart(updated))
        except Exception:
            self._items = previous
            raise
        logger.debug("Cart committed with %s items", len(updated))

    def _reject(
        self, operation: CartOperation, product_id: int, error: CartError
    ) -> CartMutationResult:
        message = failure_message(operation, error, self._language)
        logger.info("%s(%s) rejected: %s", operation.value, product_id, error.value)
        try:
            self._sink.report(message)
        except Exception as exc:
            logger.error("Notification sink failed: %s", exc)
        return CartMutationResult.failure(self._items, error, message)
