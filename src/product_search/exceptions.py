"""Errors raised by the product search layer."""

from typing import Optional


class ProductSearchError(Exception):
    """Base class for product search failures."""


class BackendError(ProductSearchError):
    """A Catalog Service or Live Search call failed (transport, HTTP status or GraphQL errors)."""

    def __init__(self, backend: str, message: str, status_code: Optional[int] = None):
        self.backend = backend
        self.status_code = status_code
        super().__init__(f"{backend}: {message}")


class ProductTransformError(ProductSearchError):
    """A single product record could not be turned into a card or detail page."""
