"""
User-facing cart failure messages.

Each failed cart operation reports exactly one of four message categories.
Texts are dictionary based and keyed by language code.

Usage:
    from storefront_cart.core.i18n import MessageKey, get_text

    text = get_text(MessageKey.ADD_FAILED, lang="pt")
"""
from __future__ import annotations

from enum import Enum

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES = ("en", "pt")


class MessageKey(str, Enum):
    """Failure message categories."""

    STOCK_EXCEEDED = "stock_exceeded"
    ADD_FAILED = "add_failed"
    REMOVE_FAILED = "remove_failed"
    AMOUNT_CHANGE_FAILED = "amount_change_failed"


TEXTS: dict[str, dict[MessageKey, str]] = {
    "en": {
        MessageKey.STOCK_EXCEEDED: "Requested quantity is out of stock",
        MessageKey.ADD_FAILED: "Failed to add product",
        MessageKey.REMOVE_FAILED: "Failed to remove product",
        MessageKey.AMOUNT_CHANGE_FAILED: "Failed to change product quantity",
    },
    "pt": {
        MessageKey.STOCK_EXCEEDED: "Quantidade solicitada fora de estoque",
        MessageKey.ADD_FAILED: "Erro na adição do produto",
        MessageKey.REMOVE_FAILED: "Erro na remoção do produto",
        MessageKey.AMOUNT_CHANGE_FAILED: "Erro na alteração de quantidade do produto",
    },
}


def get_text(key: MessageKey, lang: str | None = None) -> str:
    """Get message text for language, falling back to the default language."""
    texts = TEXTS.get(lang or DEFAULT_LANGUAGE, TEXTS[DEFAULT_LANGUAGE])
    return texts.get(key, TEXTS[DEFAULT_LANGUAGE][key])
