"""FastAPI dependency injection module.

The runtime is created by the app lifespan and stored on ``app.state``;
request handlers receive the resolver and settings through these
dependencies.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from catalog_browser.conf.config import Settings
from catalog_browser.services.catalog.resolver import CatalogResolver
from catalog_browser.services.catalog.runtime import CatalogRuntime


def get_runtime(request: Request) -> CatalogRuntime:
    return request.app.state.catalog_runtime


def get_resolver(runtime: Annotated[CatalogRuntime, Depends(get_runtime)]) -> CatalogResolver:
    return runtime.resolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


RuntimeDep = Annotated[CatalogRuntime, Depends(get_runtime)]
ResolverDep = Annotated[CatalogResolver, Depends(get_resolver)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
