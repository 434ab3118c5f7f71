"""Routers package for the catalog server."""

from catalog_browser.server.routers.health import router as health_router
from catalog_browser.server.routers.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
]
