"""Catalog source contract."""

from __future__ import annotations

from typing import Protocol

from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope


class CatalogSource(Protocol):
    """One provider in the fallback chain.

    Implementations raise ``CatalogSourceError`` when they cannot answer, so
    the resolver moves to the next provider. ``get_product`` raises
    ``ProductNotFoundError`` for a missing id; when ``authoritative`` is
    true that answer is final.
    """

    name: str
    authoritative: bool

    async def list_products(self, query: ProductQuery) -> ResultEnvelope:
        """Return one page of products matching ``query``."""

    async def get_product(self, product_id: str) -> Product:
        """Return a single product by id."""

    async def get_facets(self) -> FacetOptions:
        """Return available filter values."""
