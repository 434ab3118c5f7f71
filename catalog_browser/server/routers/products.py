"""Catalog endpoints.

Serves the same REST contract the REST catalog source consumes, so one
deployment can act as the backend of another.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from catalog_browser.core.models import FacetOptions, Product, ProductQuery, ResultEnvelope
from catalog_browser.server.dependencies import ResolverDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


def _split_values(values: list[str] | None) -> list[str]:
    """Accept repeated keys and comma-separated lists alike."""
    if not values:
        return []
    return [part for value in values for part in value.split(",")]


@router.get("/products", response_model=ResultEnvelope)
async def list_products(
    resolver: ResolverDep,
    settings: SettingsDep,
    search: str = "",
    categories: Annotated[list[str] | None, Query()] = None,
    brands: Annotated[list[str] | None, Query()] = None,
    price_min: Annotated[float | None, Query(alias="priceMin", ge=0)] = None,
    price_max: Annotated[float | None, Query(alias="priceMax", ge=0)] = None,
    page: int = 1,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
) -> ResultEnvelope:
    """List products with filters and pagination."""
    query = ProductQuery(
        search=search,
        categories=_split_values(categories),
        brands=_split_values(brands),
        price_min=price_min,
        price_max=price_max,
        page=page,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
    )
    return await resolver.list_products(query)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, resolver: ResolverDep) -> Product:
    """Single product detail; 404 when the id is unknown."""
    return await resolver.get_product(product_id)


@router.get("/facets", response_model=FacetOptions)
async def get_facets(resolver: ResolverDep) -> FacetOptions:
    """Categories, brands and price bounds for building filters."""
    return await resolver.get_facets()
