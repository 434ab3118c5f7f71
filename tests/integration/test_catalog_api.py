"""Tests for the catalog HTTP API.

These tests verify:
1. /products, /products/{id}, /facets and /health over the generated catalog
2. Error mapping (404 for unknown ids, 503 when every source is down)
3. The REST source consuming this same API through an in-process transport
"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_browser.core.models import ProductQuery
from catalog_browser.server.dependencies import get_resolver
from catalog_browser.server.main import create_app
from catalog_browser.services.catalog.mock_source import MockCatalogSource
from catalog_browser.services.catalog.resolver import CatalogResolver
from catalog_browser.services.catalog.rest_source import RestCatalogSource
from catalog_browser.services.catalog.runtime import CatalogRuntime
from catalog_browser.services.exceptions import ProductNotFoundError, SourceUnavailableError

pytestmark = pytest.mark.integration


class DownSource:
    name = "rest"
    authoritative = True

    async def list_products(self, query):
        raise SourceUnavailableError(self.name, "connection refused")

    async def get_product(self, product_id):
        raise SourceUnavailableError(self.name, "connection refused")

    async def get_facets(self):
        raise SourceUnavailableError(self.name, "connection refused")


@pytest.fixture
def mock_settings(make_settings):
    return make_settings(FEATURE_FLAGS="mock_api")


@pytest.fixture
def client(mock_settings):
    app = create_app(mock_settings, configure_logging=False)
    with TestClient(app) as client:
        yield client


class TestListProductsEndpoint:
    def test_default_page(self, client):
        response = client.get("/products")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"results", "page", "pageSize", "total", "pages"}
        assert body["total"] == 120
        assert body["pageSize"] == 12
        assert body["pages"] == 10
        assert len(body["results"]) == 12

    def test_product_shape(self, client):
        product = client.get("/products", params={"pageSize": 1}).json()["results"][0]
        assert set(product) == {
            "id", "name", "brand", "category", "price", "rating",
            "stock", "image", "description", "attributes",
        }

    def test_filters(self, client):
        body = client.get(
            "/products", params={"categories": "Electronics", "brands": "Acme"}
        ).json()
        assert [p["id"] for p in body["results"]] == ["1", "31", "61", "91"]

    def test_repeated_and_comma_separated_members(self, client):
        repeated = client.get("/products?categories=Home&categories=Toys").json()
        joined = client.get("/products", params={"categories": "Home,Toys"}).json()
        assert repeated["total"] == joined["total"] == 48

    def test_search_and_paging(self, client):
        body = client.get("/products", params={"search": "globex", "page": 2, "pageSize": 5}).json()
        assert body["total"] == 20
        assert body["page"] == 2
        assert body["pages"] == 4
        assert len(body["results"]) == 5

    def test_price_bounds(self, client):
        body = client.get("/products", params={"priceMin": 100, "priceMax": 200, "pageSize": 120}).json()
        assert all(100 <= p["price"] <= 200 for p in body["results"])

    def test_page_beyond_end(self, client):
        body = client.get("/products", params={"page": 999}).json()
        assert body["results"] == []
        assert body["pages"] == 10

    def test_page_below_one_is_clamped(self, client):
        assert client.get("/products", params={"page": 0}).json()["page"] == 1

    def test_negative_price_rejected(self, client):
        assert client.get("/products", params={"priceMin": -1}).status_code == 422


class TestProductEndpoint:
    def test_found(self, client):
        response = client.get("/products/42")
        assert response.status_code == 200
        assert response.json()["id"] == "42"

    def test_not_found(self, client):
        response = client.get("/products/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


def test_facets(client):
    body = client.get("/facets").json()
    assert body["categories"] == ["Electronics", "Home", "Outdoors", "Fashion", "Toys"]
    assert body["brands"] == ["Acme", "Globex", "Umbrella", "Soylent", "Initech", "Hooli"]
    assert body["price"] == {"min": 0, "max": 1000}


def test_health(client):
    body = client.get("/health").json()
    assert body == {
        "status": "ok",
        "force_mock": True,
        "sources": ["mock"],
        "checks": {"supabase": "disabled", "rest": "disabled"},
    }


def test_unavailable_catalog_is_503(mock_settings):
    app = create_app(mock_settings, configure_logging=False)
    app.dependency_overrides[get_resolver] = lambda: CatalogResolver([DownSource()])

    with TestClient(app) as client:
        response = client.get("/products")
        assert response.status_code == 503
        assert response.json()["error"] == "catalog_unavailable"

        # facets never fail
        assert client.get("/facets").status_code == 200


class TestRestRoundTrip:
    """RestCatalogSource reading from this API in-process."""

    @pytest.fixture
    def backend(self, mock_settings, catalog):
        app = create_app(mock_settings, configure_logging=False)
        runtime = CatalogRuntime(mock_settings)
        runtime._resolver = CatalogResolver([MockCatalogSource(catalog)])
        app.state.catalog_runtime = runtime
        return app

    @pytest.fixture
    def rest_source(self, backend):
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=backend))
        return RestCatalogSource(client, "http://catalog.test/")

    @pytest.mark.asyncio
    async def test_list(self, rest_source, catalog):
        envelope = await rest_source.list_products(
            ProductQuery(categories=["Home", "Toys"], page=2, page_size=10)
        )

        assert envelope.total == 48
        assert envelope.pages == 5
        expected = [p for p in catalog.items if p.category in ("Home", "Toys")][10:20]
        assert envelope.results == expected

    @pytest.mark.asyncio
    async def test_get_product(self, rest_source, catalog):
        assert await rest_source.get_product("7") == catalog.find("7")

    @pytest.mark.asyncio
    async def test_missing_product(self, rest_source):
        with pytest.raises(ProductNotFoundError):
            await rest_source.get_product("nope")

    @pytest.mark.asyncio
    async def test_facets(self, rest_source):
        facets = await rest_source.get_facets()
        assert facets.brands[0] == "Acme"
