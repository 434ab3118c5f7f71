"""Shared httpx client for the REST catalog backend."""

from __future__ import annotations

import httpx

from catalog_browser.conf.config import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Build the async client used by the REST catalog source.

    ``REST_TIMEOUT_SECONDS`` unset means no timeout.
    """
    return httpx.AsyncClient(
        timeout=settings.REST_TIMEOUT_SECONDS,
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )
