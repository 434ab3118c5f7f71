"""Health check router."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter

from catalog_browser.server.dependencies import RuntimeDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(runtime: RuntimeDep) -> dict[str, Any]:
    """Health check with the active source chain.

    A failing Supabase ping only degrades the status; requests still fall
    back to the next source.
    """
    settings = runtime.settings
    status = "ok"
    checks: dict[str, Any] = {}

    client = runtime.supabase_client
    if client is None:
        checks["supabase"] = "disabled"
    else:
        try:
            await asyncio.to_thread(
                lambda: client.table(settings.SUPABASE_PRODUCTS_TABLE).select("id").limit(1).execute()
            )
            checks["supabase"] = "ok"
        except Exception as e:
            checks["supabase"] = f"error: {type(e).__name__}"
            status = "degraded"
            logger.warning("Health check: Supabase unavailable: %s", e)

    checks["rest"] = "configured" if runtime.http_client is not None else "disabled"

    return {
        "status": status,
        "force_mock": settings.force_mock,
        "sources": runtime.resolver.source_names,
        "checks": checks,
    }
