"""
Catalog Source - Supabase implementation.
=========================================
Product search and retrieval from the managed store. supabase-py is a
blocking client, so every ``execute()`` runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from typing import Any

from supabase import Client

from catalog_browser.core.models import (
    DEFAULT_PRICE_MAX,
    DEFAULT_PRICE_MIN,
    FacetOptions,
    PriceRange,
    Product,
    ProductQuery,
    ResultEnvelope,
)
from catalog_browser.core.product_adapter import ProductAdapter
from catalog_browser.services.exceptions import (
    MalformedResponseError,
    ProductNotFoundError,
    SourceUnavailableError,
)

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ("name", "brand", "category")

# PostgREST treats these as syntax inside an or=(...) expression; '*' is
# rewritten to '%' by PostgREST and cannot be escaped
_FILTER_SYNTAX = re.compile(r"[,()*]")
# LIKE wildcards, matched literally once backslash-escaped
_LIKE_WILDCARDS = re.compile(r"([\\%_])")


def escape_search(text: str) -> str:
    """Make ``text`` safe to embed in an ``ilike`` pattern as a plain substring."""
    return _LIKE_WILDCARDS.sub(r"\\\1", _FILTER_SYNTAX.sub(" ", text).strip())


def _as_number(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


class SupabaseCatalogSource:
    """
    Product catalog source backed by a Supabase table.
    """

    name = "supabase"
    # a row missing here may still exist in the REST backend
    authoritative = False

    def __init__(self, client: Client, *, table: str = "products") -> None:
        self.client = client
        self.table = table

    async def _execute(self, operation: str, call: Callable[[], Any]) -> Any:
        try:
            return await asyncio.to_thread(call)
        except Exception as e:
            raise SourceUnavailableError(
                self.name, f"{operation} failed: {type(e).__name__}: {e}"
            ) from e

    def _build_list_query(self, query: ProductQuery) -> Any:
        builder = self.client.table(self.table).select("*", count="exact")

        if query.search:
            needle = escape_search(query.search)
            if needle:
                builder = builder.or_(
                    ",".join(f"{column}.ilike.%{needle}%" for column in SEARCH_COLUMNS)
                )
        if query.categories:
            builder = builder.in_("category", list(query.categories))
        if query.brands:
            builder = builder.in_("brand", list(query.brands))
        if query.price_min is not None:
            builder = builder.gte("price", query.price_min)
        if query.price_max is not None:
            builder = builder.lte("price", query.price_max)

        start = query.offset
        return builder.order("name", desc=False).range(start, start + query.page_size - 1)

    async def list_products(self, query: ProductQuery) -> ResultEnvelope:
        response = await self._execute(
            "list products", lambda: self._build_list_query(query).execute()
        )

        products = ProductAdapter.from_rows(response.data, source=self.name)
        count = response.count
        total = count if isinstance(count, int) else len(products)
        return ResultEnvelope.build(
            products, page=query.page, page_size=query.page_size, total=total
        )

    async def get_product(self, product_id: str) -> Product:
        response = await self._execute(
            "get product",
            lambda: self.client.table(self.table).select("*").eq("id", product_id).limit(1).execute(),
        )

        rows = response.data or []
        if not rows:
            raise ProductNotFoundError(str(product_id), source=self.name)
        return ProductAdapter.from_row(rows[0], source=self.name)

    async def _distinct(self, column: str) -> list[str]:
        response = await self._execute(
            f"distinct {column}",
            lambda: self.client.table(self.table).select(column).not_.is_(column, "null").execute(),
        )

        rows = response.data or []
        if not isinstance(rows, list):
            raise MalformedResponseError(self.name, f"distinct {column} did not return rows")
        values = (row.get(column) for row in rows if isinstance(row, dict))
        return list(dict.fromkeys(str(v) for v in values if v))

    async def _rpc(self, function: str) -> Any:
        response = await self._execute(
            f"rpc {function}", lambda: self.client.rpc(function, {}).execute()
        )
        return response.data

    async def get_facets(self) -> FacetOptions:
        # any failing sub-query aborts the whole facet fetch
        categories = await self._distinct("category")
        brands = await self._distinct("brand")
        min_price = await self._rpc("min_price")
        max_price = await self._rpc("max_price")

        return FacetOptions(
            categories=categories,
            brands=brands,
            price=PriceRange(
                min=_as_number(min_price, DEFAULT_PRICE_MIN),
                max=_as_number(max_price, DEFAULT_PRICE_MAX),
            ),
        )
