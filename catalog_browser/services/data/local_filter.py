"""In-memory filtering and pagination over a product sequence."""

from __future__ import annotations

from collections.abc import Sequence

from catalog_browser.core.models import Product, ProductQuery, ResultEnvelope


def matches_search(product: Product, needle: str) -> bool:
    """Case-insensitive substring match on name, brand or category."""
    return (
        needle in product.name.lower()
        or needle in product.brand.lower()
        or needle in product.category.lower()
    )


def filter_products(query: ProductQuery, items: Sequence[Product]) -> list[Product]:
    """Apply every filter of ``query``; order of ``items`` is kept."""
    filtered = list(items)

    if query.search:
        needle = query.search.lower()
        filtered = [p for p in filtered if matches_search(p, needle)]
    if query.categories:
        categories = set(query.categories)
        filtered = [p for p in filtered if p.category in categories]
    if query.brands:
        brands = set(query.brands)
        filtered = [p for p in filtered if p.brand in brands]
    if query.price_min is not None:
        filtered = [p for p in filtered if p.price >= query.price_min]
    if query.price_max is not None:
        filtered = [p for p in filtered if p.price <= query.price_max]

    return filtered


def filter_and_paginate(query: ProductQuery, items: Sequence[Product]) -> ResultEnvelope:
    """Filter ``items`` and cut out the requested page.

    A page past the end gives empty ``results`` with the real totals.
    """
    filtered = filter_products(query, items)
    start = query.offset
    return ResultEnvelope.build(
        filtered[start : start + query.page_size],
        page=query.page,
        page_size=query.page_size,
        total=len(filtered),
    )
