"""
Failure notifications for cart operations.

Maps (operation, error kind) to one of the four user-facing message
categories and delivers the text through a sink. Sinks are fire-and-forget:
their errors are logged and never reach the cart operation.
"""
from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from storefront_cart.core.i18n import MessageKey, get_text
from storefront_cart.domain.cart import CartError
from storefront_cart.logging_config import logger


class CartOperation(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    SET_AMOUNT = "set_amount"


_MESSAGE_KEYS: dict[tuple[CartOperation, CartError], MessageKey] = {
    (CartOperation.ADD, CartError.INSUFFICIENT_STOCK): MessageKey.STOCK_EXCEEDED,
    (CartOperation.ADD, CartError.TRANSPORT_FAILURE): MessageKey.ADD_FAILED,
}

# Fallback category per operation for every other error kind
_DEFAULT_KEYS: dict[CartOperation, MessageKey] = {
    CartOperation.ADD: MessageKey.ADD_FAILED,
    CartOperation.REMOVE: MessageKey.REMOVE_FAILED,
    CartOperation.SET_AMOUNT: MessageKey.AMOUNT_CHANGE_FAILED,
}


def failure_message(operation: CartOperation, error: CartError, lang: str | None = None) -> str:
    """Text reported to the user when ``operation`` fails with ``error``."""
    key = _MESSAGE_KEYS.get((operation, error), _DEFAULT_KEYS[operation])
    return get_text(key, lang)


class NotificationSink(Protocol):
    def report(self, message: str) -> None: ...


class LoggingNotificationSink:
    """Writes failure messages to the log."""

    def report(self, message: str) -> None:
        logger.warning("Cart notification: %s", message)


class CallbackNotificationSink:
    """Forwards messages to a callable, e.g. a UI toast function."""

    def __init__(self, callback: Callable[[str], object]):
        self._callback = callback

    def report(self, message: str) -> None:
        try:
            self._callback(message)
        except Exception as exc:
            logger.error("Notification callback failed: %s", exc)


class RecordingNotificationSink:
    """Keeps reported messages in order."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)

    @property
    def last(self) -> str | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()
