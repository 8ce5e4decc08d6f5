"""Cart services."""
from __future__ import annotations

from .cart_service import CartService
from .notifications import (
    CallbackNotificationSink,
    CartOperation,
    LoggingNotificationSink,
    NotificationSink,
    RecordingNotificationSink,
    failure_message,
)

__all__ = [
    "CallbackNotificationSink",
    "CartOperation",
    "CartService",
    "LoggingNotificationSink",
    "NotificationSink",
    "RecordingNotificationSink",
    "failure_message",
]
