"""Process-lifetime ownership of backend handles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_browser.conf.config import Settings, get_settings
from catalog_browser.services.catalog.resolver import CatalogResolver, build_sources
from catalog_browser.services.infra.http_client import create_http_client
from catalog_browser.services.infra.supabase_client import create_supabase_client

if TYPE_CHECKING:
    import httpx
    from supabase import Client

logger = logging.getLogger(__name__)


class CatalogRuntime:
    """Creates the Supabase client, the HTTP client and the resolver once.

    Usage:
        async with CatalogRuntime() as runtime:
            envelope = await runtime.resolver.list_products(query)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.supabase_client: Client | None = None
        self.http_client: httpx.AsyncClient | None = None
        self._resolver: CatalogResolver | None = None

    @property
    def resolver(self) -> CatalogResolver:
        if self._resolver is None:
            raise RuntimeError("CatalogRuntime is not started")
        return self._resolver

    def start(self) -> CatalogResolver:
        if self._resolver is not None:
            return self._resolver

        if not self.settings.force_mock:
            self.supabase_client = create_supabase_client(self.settings)
            if self.settings.rest_enabled:
                self.http_client = create_http_client(self.settings)

        self._resolver = CatalogResolver(
            build_sources(
                self.settings,
                supabase_client=self.supabase_client,
                http_client=self.http_client,
            )
        )
        return self._resolver

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None
        self.supabase_client = None
        self._resolver = None

    async def __aenter__(self) -> CatalogRuntime:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
