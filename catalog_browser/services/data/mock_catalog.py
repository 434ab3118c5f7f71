"""
Generated product catalog.
==========================
A fixed-size synthetic catalog used when no remote backend can answer.
Built once per process, read-only afterwards.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from functools import lru_cache

from catalog_browser.core.models import FacetOptions, PriceRange, Product
from catalog_browser.core.product_adapter import placeholder_image

logger = logging.getLogger(__name__)

CATALOG_SIZE = 120
CATEGORIES = ("Electronics", "Home", "Outdoors", "Fashion", "Toys")
BRANDS = ("Acme", "Globex", "Umbrella", "Soylent", "Initech", "Hooli")
COLORS = ("Black", "Silver", "Blue", "Amber")
DESCRIPTION = "High-quality product with modern design and excellent performance characteristics."


@dataclass(frozen=True)
class MockCatalog:
    """Immutable generated catalog."""

    items: tuple[Product, ...]
    categories: tuple[str, ...] = CATEGORIES
    brands: tuple[str, ...] = BRANDS

    def find(self, product_id: str) -> Product | None:
        for item in self.items:
            if item.id == product_id:
                return item
        return None

    def facets(self) -> FacetOptions:
        return static_facets(self)


def generate_catalog(seed: int | None = None, size: int = CATALOG_SIZE) -> MockCatalog:
    """Build a catalog of ``size`` records.

    Categories and brands cycle in fixed order; price, rating, stock and
    weight come from a ``random.Random`` seeded with ``seed``.
    """
    rng = random.Random(seed)
    items = []
    for i in range(size):
        category = CATEGORIES[i % len(CATEGORIES)]
        brand = BRANDS[i % len(BRANDS)]
        number = i + 1
        items.append(
            Product(
                id=str(number),
                name=f"{brand} {category} Item {number}",
                brand=brand,
                category=category,
                price=round(rng.uniform(10, 510), 2),
                rating=round(rng.uniform(0, 5), 1),
                stock=rng.randrange(100),
                image=placeholder_image(number),
                description=DESCRIPTION,
                attributes={
                    "color": COLORS[i % len(COLORS)],
                    "weight": f"{rng.uniform(0.2, 3.2):.1f} kg",
                    "warranty": f"{(i % 3) + 1} years",
                },
            )
        )
    return MockCatalog(items=tuple(items))


@lru_cache(maxsize=None)
def get_mock_catalog(seed: int | None = None) -> MockCatalog:
    """Return the generated catalog for ``seed``, building it on first use.

    ``None`` draws a fresh seed, once per process.
    """
    catalog = generate_catalog(seed)
    logger.info(
        "[CATALOG:MOCK] Generated %d products (seed=%s)",
        len(catalog.items),
        "fixed" if seed is not None else "random",
    )
    return catalog


def static_facets(catalog: MockCatalog | None = None) -> FacetOptions:
    """Facet values that never depend on a backend."""
    categories = catalog.categories if catalog else CATEGORIES
    brands = catalog.brands if catalog else BRANDS
    return FacetOptions(
        categories=list(categories),
        brands=list(brands),
        price=PriceRange(),
    )
