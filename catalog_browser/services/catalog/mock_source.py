"""Catalog source backed by the generated in-memory catalog."""

from __future__ import annotations

from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope
from catalog_browser.services.data.local_filter import filter_and_paginate
from catalog_browser.services.data.mock_catalog import MockCatalog
from catalog_browser.services.exceptions import ProductNotFoundError


class MockCatalogSource:
    """Terminal provider: never fails except for unknown ids."""

    name = "mock"
    authoritative = True

    def __init__(self, catalog: MockCatalog) -> None:
        self.catalog = catalog

    async def list_products(self, query: ProductQuery) -> ResultEnvelope:
        return filter_and_paginate(query, self.catalog.items)

    async def get_product(self, product_id: str) -> Product:
        product = self.catalog.find(str(product_id))
        if product is None:
            raise ProductNotFoundError(str(product_id), source=self.name)
        return product

    async def get_facets(self) -> FacetOptions:
        return self.catalog.facets()
