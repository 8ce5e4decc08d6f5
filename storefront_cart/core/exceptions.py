"""Custom exceptions raised by cart collaborators.

None of these escape a cart operation: ``CartService`` catches them at the
operation boundary and reports a message instead.
"""
from __future__ import annotations


class StorefrontCartException(Exception):
    """Base exception for all storefront cart errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class CatalogException(StorefrontCartException):
    """Catalog or inventory lookup failed."""

    pass


class ProductNotFoundException(CatalogException):
    """Catalog has no product or stock record for the id."""

    def __init__(self, product_id: int, resource: str = "products") -> None:
        super().__init__(f"No {resource} record for product {product_id}")
        self.product_id = product_id
        self.resource = resource


class CatalogUnavailableException(CatalogException):
    """Network, timeout or malformed response from the catalog service."""

    pass


class CartStorageException(StorefrontCartException):
    """Durable cart storage could not be read or written."""

    pass


class ConfigurationException(StorefrontCartException):
    """Configuration errors."""

    pass
