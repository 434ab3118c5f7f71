"""Catalog sources and the resolver that chains them."""

from catalog_browser.services.catalog.base import CatalogSource
from catalog_browser.services.catalog.mock_source import MockCatalogSource
from catalog_browser.services.catalog.resolver import CatalogResolver, build_sources
from catalog_browser.services.catalog.rest_source import RestCatalogSource
from catalog_browser.services.catalog.runtime import CatalogRuntime
from catalog_browser.services.catalog.supabase_source import SupabaseCatalogSource

__all__ = [
    "CatalogResolver",
    "CatalogRuntime",
    "CatalogSource",
    "MockCatalogSource",
    "RestCatalogSource",
    "SupabaseCatalogSource",
    "build_sources",
]
