"""
Catalog exceptions.
===================
Recoverable source failures move the resolver to the next source.
Not-found is a separate condition that reaches the caller.
"""

from __future__ import annotations


class CatalogSourceError(Exception):
    """Raised by a catalog source when it cannot serve a request."""

    def __init__(self, source: str, message: str | None = None):
        self.source = source
        self.message = message or f"{source} source failed"
        super().__init__(self.message)


class SourceUnavailableError(CatalogSourceError):
    """Transport failure, non-success status or unconfigured backend."""

    def __init__(self, source: str, message: str | None = None):
        super().__init__(source, message or f"{source} source is unavailable")


class MalformedResponseError(CatalogSourceError):
    """Response was not JSON or did not match the expected shape."""

    def __init__(self, source: str, message: str | None = None):
        super().__init__(source, message or f"{source} returned a malformed response")


class ProductNotFoundError(LookupError):
    """Raised when a product id does not exist."""

    def __init__(self, product_id: str, source: str | None = None):
        self.product_id = product_id
        self.source = source
        super().__init__(f"Product {product_id!r} not found")


class CatalogUnavailableError(RuntimeError):
    """Raised when every source in the chain failed to list products."""

    def __init__(self, attempted: list[str]):
        self.attempted = attempted
        super().__init__(f"No catalog source could serve the request (tried: {', '.join(attempted) or 'none'})")
