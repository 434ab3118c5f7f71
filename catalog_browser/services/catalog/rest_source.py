"""
REST catalog source.
====================
Reads the catalog from a generic HTTP API:

    GET <base>/products?search=&categories=&brands=&priceMin=&priceMax=&page=&pageSize=
    GET <base>/products/<id>
    GET <base>/facets
"""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope
from catalog_browser.core.product_adapter import ProductAdapter
from catalog_browser.services.exceptions import (
    MalformedResponseError,
    ProductNotFoundError,
    SourceUnavailableError,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def build_query_params(query: ProductQuery) -> dict[str, str]:
    """Query-string parameters for ``query``; absent or empty values are left out."""
    params: dict[str, str] = {}
    if query.search:
        params["search"] = query.search
    if query.price_min is not None:
        params["priceMin"] = _format_number(query.price_min)
    if query.price_max is not None:
        params["priceMax"] = _format_number(query.price_max)
    params["page"] = str(query.page)
    params["pageSize"] = str(query.page_size)
    if query.categories:
        params["categories"] = ",".join(query.categories)
    if query.brands:
        params["brands"] = ",".join(query.brands)
    return params


class RestCatalogSource:
    """Catalog source that talks to a REST backend over a shared httpx client."""

    name = "rest"
    authoritative = True

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        started = time.perf_counter()
        try:
            response = await self.client.get(url, params=params, headers=JSON_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SourceUnavailableError(
                self.name, f"GET {path} failed: {type(e).__name__}: {e}"
            ) from e

        logger.debug(
            "[CATALOG:REST] GET %s -> %d",
            path,
            response.status_code,
            extra={
                "source": self.name,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response

    def _json(self, response: httpx.Response, path: str) -> Any:
        if not response.is_success:
            raise SourceUnavailableError(self.name, f"GET {path} returned HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(self.name, f"GET {path} returned non-JSON body") from e

    async def list_products(self, query: ProductQuery) -> ResultEnvelope:
        path = "/products"
        payload = self._json(await self._get(path, build_query_params(query)), path)
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise MalformedResponseError(self.name, "product envelope has no 'results' list")

        products = ProductAdapter.from_rows(payload["results"], source=self.name)
        try:
            page = int(payload.get("page") or query.page)
            page_size = int(payload.get("pageSize") or query.page_size)
            total = int(payload.get("total", len(products)))
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(self.name, f"invalid envelope fields: {e}") from e

        if len(products) > page_size:
            raise MalformedResponseError(
                self.name, f"envelope has {len(products)} results for pageSize {page_size}"
            )
        if total < len(products):
            raise MalformedResponseError(
                self.name, f"envelope total {total} is below its {len(products)} results"
            )
        try:
            return ResultEnvelope.build(products, page=page, page_size=page_size, total=total)
        except ValidationError as e:
            raise MalformedResponseError(self.name, f"invalid envelope fields: {e.error_count()} field error(s)") from e

    async def get_product(self, product_id: str) -> Product:
        path = f"/products/{quote(str(product_id), safe='')}"
        response = await self._get(path)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise ProductNotFoundError(str(product_id), source=self.name)
        return ProductAdapter.from_row(self._json(response, path), source=self.name)

    async def get_facets(self) -> FacetOptions:
        path = "/facets"
        payload = self._json(await self._get(path), path)
        if not isinstance(payload, dict) or not all(
            isinstance(payload.get(key), list) for key in ("categories", "brands")
        ):
            raise MalformedResponseError(self.name, "facets must contain 'categories' and 'brands' lists")
        try:
            return FacetOptions.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(self.name, f"invalid facets: {e.error_count()} field error(s)") from e
