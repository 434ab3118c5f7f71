"""ASGI app exposing the catalog over HTTP.

Thin orchestrator that:
1. Builds the catalog runtime for the app lifetime
2. Maps catalog errors to HTTP responses
3. Includes the routers
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from catalog_browser import __version__
from catalog_browser.conf.config import Settings, get_settings, validate_settings
from catalog_browser.core.logging import setup_logging
from catalog_browser.server.routers import health_router, products_router
from catalog_browser.services.catalog.runtime import CatalogRuntime
from catalog_browser.services.exceptions import CatalogUnavailableError, ProductNotFoundError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, configure_logging: bool = True) -> FastAPI:
    """Build the FastAPI application for ``settings``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
        validate_settings(settings)

        runtime = CatalogRuntime(settings)
        runtime.start()
        app.state.catalog_runtime = runtime
        logger.info("Starting catalog server (sources: %s)", ", ".join(runtime.resolver.source_names))

        yield

        logger.info("Shutting down catalog server")
        await runtime.close()

    app = FastAPI(
        title="Catalog Browser",
        description="Product catalog with Supabase, REST and generated-data sources",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.exception_handler(ProductNotFoundError)
    async def not_found_handler(request: Request, exc: ProductNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "error": "not_found"},
        )

    @app.exception_handler(CatalogUnavailableError)
    async def unavailable_handler(request: Request, exc: CatalogUnavailableError) -> JSONResponse:
        logger.error("Catalog unavailable: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc), "error": "catalog_unavailable"},
        )

    app.include_router(health_router)
    app.include_router(products_router)
    return app


app = create_app()
