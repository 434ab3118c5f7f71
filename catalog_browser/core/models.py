"""Typed contracts shared by every catalog source and its callers.

This module defines:
- Product (the canonical record shape)
- ProductQuery (filters + pagination for one fetch)
- ResultEnvelope (uniform paginated response)
- FacetOptions (filter dimensions and their values)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE_SIZE = 12
DEFAULT_PRICE_MIN = 0.0
DEFAULT_PRICE_MAX = 1000.0


def page_count(total: int, page_size: int) -> int:
    """Number of pages for ``total`` items, never less than one."""
    return max(1, -(-total // page_size))


class Product(BaseModel):
    """Product as exposed to callers, whatever source served it."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Opaque, stable product id")
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    stock: int = Field(default=0, ge=0)
    image: str = Field(..., min_length=1)
    description: str = ""
    attributes: dict[str, str | int | float] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("price")
    @classmethod
    def round_price(cls, v: float) -> float:
        return round(v, 2)


def _normalize_members(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        raise ValueError("expected a string or a list of strings")

    seen: dict[str, None] = {}
    for item in value:
        text = str(item).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


class ProductQuery(BaseModel):
    """Filters and pagination for a single list request.

    Empty ``search``/``categories``/``brands`` mean "no filter". Page and
    page size below one are clamped to one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search: str = ""
    categories: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    price_min: float | None = Field(default=None, ge=0, alias="priceMin")
    price_max: float | None = Field(default=None, ge=0, alias="priceMax")
    page: int = 1
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="pageSize")

    @field_validator("search", mode="before")
    @classmethod
    def strip_search(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("categories", "brands", mode="before")
    @classmethod
    def normalize_members(cls, v: Any) -> tuple[str, ...]:
        return _normalize_members(v)

    @field_validator("price_min", "price_max", mode="before")
    @classmethod
    def blank_price_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page(cls, v: Any) -> int:
        return 1 if v is None else max(1, int(v))

    @field_validator("page_size", mode="before")
    @classmethod
    def clamp_page_size(cls, v: Any) -> int:
        return DEFAULT_PAGE_SIZE if v is None else max(1, int(v))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class ResultEnvelope(BaseModel):
    """Uniform paginated response returned by every source."""

    model_config = ConfigDict(populate_by_name=True)

    results: list[Product]
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1, alias="pageSize")
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=1)

    @classmethod
    def build(
        cls,
        results: Sequence[Product],
        *,
        page: int,
        page_size: int,
        total: int,
    ) -> ResultEnvelope:
        return cls(
            results=list(results),
            page=page,
            page_size=page_size,
            total=total,
            pages=page_count(total, page_size),
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on the REST wire."""
        return self.model_dump(by_alias=True)


class PriceRange(BaseModel):
    min: float = DEFAULT_PRICE_MIN
    max: float = DEFAULT_PRICE_MAX


class FacetOptions(BaseModel):
    """Values available for each filter dimension."""

    categories: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    price: PriceRange = Field(default_factory=PriceRange)
