"""
Unit tests for the Supabase client factory and the catalog runtime.
"""
from unittest.mock import MagicMock, patch

import httpx
import pytest

from catalog_browser.core.models import ProductQuery
from catalog_browser.services.catalog.runtime import CatalogRuntime
from catalog_browser.services.data.mock_catalog import generate_catalog
from catalog_browser.services.infra.http_client import create_http_client
from catalog_browser.services.infra.supabase_client import create_supabase_client


class TestCreateSupabaseClient:
    def test_disabled_without_configuration(self, make_settings, caplog):
        with patch("catalog_browser.services.infra.supabase_client.create_client") as mock_create:
            with caplog.at_level("INFO"):
                assert create_supabase_client(make_settings()) is None
        mock_create.assert_not_called()
        assert "SUPABASE_URL" in caplog.text
        assert "SUPABASE_API_KEY" in caplog.text

    def test_creates_client(self, make_settings):
        settings = make_settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_API_KEY="key")
        sentinel = MagicMock()
        with patch(
            "catalog_browser.services.infra.supabase_client.create_client", return_value=sentinel
        ) as mock_create:
            assert create_supabase_client(settings) is sentinel
        mock_create.assert_called_once_with("https://x.supabase.co", "key")

    def test_init_failure_returns_none(self, make_settings):
        settings = make_settings(SUPABASE_URL="https://x.supabase.co", SUPABASE_API_KEY="key")
        with patch(
            "catalog_browser.services.infra.supabase_client.create_client",
            side_effect=ValueError("Invalid API key"),
        ):
            assert create_supabase_client(settings) is None


def test_http_client_uses_configured_timeout(make_settings):
    client = create_http_client(make_settings(REST_TIMEOUT_SECONDS=3))
    assert client.timeout.read == 3
    assert client.headers["accept"] == "application/json"


class TestCatalogRuntime:
    def test_resolver_requires_start(self, make_settings):
        with pytest.raises(RuntimeError):
            CatalogRuntime(make_settings()).resolver

    @pytest.mark.asyncio
    async def test_generated_catalog_only_by_default(self, make_settings):
        async with CatalogRuntime(make_settings()) as runtime:
            assert runtime.resolver.source_names == ["mock"]
            assert runtime.http_client is None

    @pytest.mark.asyncio
    async def test_injected_seed_decides_generated_catalog(self, make_settings):
        expected = [p.price for p in generate_catalog(seed=99).items[:3]]

        async with CatalogRuntime(make_settings(MOCK_CATALOG_SEED=99)) as runtime:
            envelope = await runtime.resolver.list_products(ProductQuery(page_size=3))

        assert [p.price for p in envelope.results] == expected

    @pytest.mark.asyncio
    async def test_different_seeds_give_different_catalogs(self, make_settings):
        async with CatalogRuntime(make_settings(MOCK_CATALOG_SEED=1)) as first:
            prices_a = [p.price for p in (await first.resolver.list_products(ProductQuery())).results]
        async with CatalogRuntime(make_settings(MOCK_CATALOG_SEED=2)) as second:
            prices_b = [p.price for p in (await second.resolver.list_products(ProductQuery())).results]

        assert prices_a != prices_b

    @pytest.mark.asyncio
    async def test_rest_client_lifecycle(self, make_settings):
        runtime = CatalogRuntime(make_settings(CATALOG_API_BASE="https://api.example.com"))
        runtime.start()
        client = runtime.http_client

        assert isinstance(client, httpx.AsyncClient)
        assert runtime.resolver.source_names == ["rest", "mock"]

        await runtime.close()
        assert client.is_closed
        with pytest.raises(RuntimeError):
            runtime.resolver

    @pytest.mark.asyncio
    async def test_force_mock_creates_no_clients(self, make_settings):
        settings = make_settings(
            FEATURE_FLAGS="mock_api",
            SUPABASE_URL="https://x.supabase.co",
            SUPABASE_API_KEY="key",
            CATALOG_API_BASE="https://api.example.com",
        )
        with patch("catalog_browser.services.infra.supabase_client.create_client") as mock_create:
            async with CatalogRuntime(settings) as runtime:
                assert runtime.resolver.source_names == ["mock"]
                assert runtime.http_client is None
        mock_create.assert_not_called()
