"""
Catalog Resolver.
=================
Single entry point for the three catalog operations. Sources are tried in
order; a ``CatalogSourceError`` moves on to the next one and exactly one
source's answer is returned.

Chain selection:
- ``mock_api`` feature flag: generated catalog only
- otherwise: Supabase (if configured) -> REST (if configured) -> generated catalog
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from catalog_browser.conf.config import FORCE_MOCK_FLAG, Settings
from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope
from catalog_browser.services.catalog.base import CatalogSource
from catalog_browser.services.catalog.mock_source import MockCatalogSource
from catalog_browser.services.catalog.rest_source import RestCatalogSource
from catalog_browser.services.catalog.supabase_source import SupabaseCatalogSource
from catalog_browser.services.data.mock_catalog import MockCatalog, get_mock_catalog, static_facets
from catalog_browser.services.exceptions import (
    CatalogSourceError,
    CatalogUnavailableError,
    ProductNotFoundError,
)

if TYPE_CHECKING:
    import httpx
    from supabase import Client

logger = logging.getLogger(__name__)


def build_sources(
    settings: Settings,
    *,
    supabase_client: Client | None = None,
    http_client: httpx.AsyncClient | None = None,
    mock_catalog: MockCatalog | None = None,
) -> list[CatalogSource]:
    """Decide the fallback chain from configuration and available handles."""
    mock = MockCatalogSource(mock_catalog or get_mock_catalog(settings.MOCK_CATALOG_SEED))
    if settings.force_mock:
        logger.info("[CATALOG] Feature flag '%s' set, using generated catalog only", FORCE_MOCK_FLAG)
        return [mock]

    sources: list[CatalogSource] = []
    if supabase_client is not None:
        sources.append(
            SupabaseCatalogSource(supabase_client, table=settings.SUPABASE_PRODUCTS_TABLE)
        )
    if settings.rest_enabled and http_client is not None:
        sources.append(RestCatalogSource(http_client, settings.rest_base_url))
    sources.append(mock)
    return sources


class CatalogResolver:
    """Runs catalog operations against an ordered chain of sources."""

    def __init__(self, sources: Sequence[CatalogSource]) -> None:
        if not sources:
            raise ValueError("CatalogResolver needs at least one source")
        self.sources = tuple(sources)
        logger.info("[CATALOG] Source chain: %s", " -> ".join(self.source_names))

    @property
    def source_names(self) -> list[str]:
        return [source.name for source in self.sources]

    def _log_fallback(self, source: CatalogSource, operation: str, error: Exception) -> None:
        logger.warning(
            "[CATALOG:%s] %s failed, falling back: %s",
            source.name.upper(),
            operation,
            error,
            extra={"source": source.name},
        )

    async def list_products(self, query: ProductQuery) -> ResultEnvelope:
        """Return one page of products. Never raises for source failures
        while the chain ends with the generated catalog."""
        attempted: list[str] = []
        for source in self.sources:
            attempted.append(source.name)
            started = time.perf_counter()
            try:
                envelope = await source.list_products(query)
            except CatalogSourceError as e:
                self._log_fallback(source, "list_products", e)
                continue

            logger.debug(
                "[CATALOG:%s] list_products page=%d total=%d",
                source.name.upper(),
                envelope.page,
                envelope.total,
                extra={
                    "source": source.name,
                    "total": envelope.total,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
            return envelope

        raise CatalogUnavailableError(attempted)

    async def get_product(self, product_id: str) -> Product:
        """Return one product or raise ProductNotFoundError."""
        product_id = str(product_id)
        attempted: list[str] = []
        not_found = False
        for source in self.sources:
            attempted.append(source.name)
            try:
                return await source.get_product(product_id)
            except ProductNotFoundError:
                if source.authoritative:
                    raise
                not_found = True
                logger.info(
                    "[CATALOG:%s] Product %s not found, trying next source",
                    source.name.upper(),
                    product_id,
                    extra={"source": source.name, "product_id": product_id},
                )
            except CatalogSourceError as e:
                self._log_fallback(source, "get_product", e)

        if not_found:
            raise ProductNotFoundError(product_id)
        raise CatalogUnavailableError(attempted)

    async def get_facets(self) -> FacetOptions:
        """Return facet options; static defaults when every source fails."""
        for source in self.sources:
            try:
                return await source.get_facets()
            except CatalogSourceError as e:
                self._log_fallback(source, "get_facets", e)

        logger.warning("[CATALOG] All sources failed for facets, using static defaults")
        return static_facets()
