"""Core building blocks: canonical models, the product adapter and logging setup."""

from catalog_browser.core.models import (
    FacetOptions,
    PriceRange,
    Product,
    ProductQuery,
    ResultEnvelope,
    page_count,
)
from catalog_browser.core.product_adapter import ProductAdapter

__all__ = [
    "FacetOptions",
    "PriceRange",
    "Product",
    "ProductAdapter",
    "ProductQuery",
    "ResultEnvelope",
    "page_count",
]
