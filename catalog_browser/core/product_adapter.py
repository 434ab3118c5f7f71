"""
Product Adapter - unification of product schemas.
================================================
Every source hands raw rows to this adapter; callers only ever see the
canonical ``Product``.

- `image_url` is accepted as an alias of `image`
- `product_id` is accepted as an alias of `id`
- missing price/rating/stock become 0, missing description becomes ""
- missing image becomes a generated placeholder

Usage:
    from catalog_browser.core.product_adapter import ProductAdapter

    product = ProductAdapter.from_row(row, source="supabase")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from catalog_browser.core.models import Product
from catalog_browser.services.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{id}/400/300"


def placeholder_image(product_id: Any) -> str:
    return PLACEHOLDER_IMAGE_URL.format(id=product_id)


class ProductAdapter:
    """
    Decodes source rows into canonical products.
    Single source of truth for product schema transformations.
    """

    ID_KEYS = ("id", "product_id")
    IMAGE_KEYS = ("image", "image_url")

    @staticmethod
    def _first(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
        for key in keys:
            value = row.get(key)
            if value not in (None, ""):
                return value
        return None

    @staticmethod
    def _number(value: Any) -> Any:
        return 0 if value is None else value

    @classmethod
    def normalize(cls, row: Mapping[str, Any]) -> dict[str, Any]:
        """Map a raw row onto canonical field names without validating."""
        product_id = cls._first(row, cls.ID_KEYS)
        return {
            "id": product_id,
            "name": row.get("name"),
            "brand": row.get("brand"),
            "category": row.get("category"),
            "price": cls._number(row.get("price")),
            "rating": cls._number(row.get("rating")),
            "stock": cls._number(row.get("stock")),
            "image": cls._first(row, cls.IMAGE_KEYS) or placeholder_image(product_id),
            "description": row.get("description") or "",
            "attributes": row.get("attributes") or {},
        }

    @classmethod
    def from_row(cls, row: Any, *, source: str) -> Product:
        """Decode one row or raise MalformedResponseError."""
        if not isinstance(row, Mapping):
            raise MalformedResponseError(
                source, f"product row must be an object, got {type(row).__name__}"
            )

        normalized = cls.normalize(row)
        try:
            return Product.model_validate(normalized)
        except ValidationError as e:
            logger.debug("[CATALOG:%s] Row rejected: %s", source.upper(), e)
            raise MalformedResponseError(
                source,
                f"invalid product row {normalized['id']!r}: {e.error_count()} field error(s)",
            ) from e

    @classmethod
    def from_rows(cls, rows: Any, *, source: str) -> list[Product]:
        if rows is None:
            return []
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            raise MalformedResponseError(source, "product rows must be a list")
        return [cls.from_row(row, source=source) for row in rows]
