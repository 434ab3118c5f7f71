"""Supabase client factory.

The client is created once by ``CatalogRuntime`` and injected into the
Supabase catalog source.
"""

from __future__ import annotations

import logging

from supabase import Client, create_client

from catalog_browser.conf.config import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client | None:
    """Return a configured Supabase client or ``None`` when disabled.

    Missing configuration and initialization errors both yield ``None`` so
    the catalog falls back to the next source instead of failing.
    """
    if not settings.supabase_enabled:
        missing = []
        if not settings.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not settings.SUPABASE_API_KEY.get_secret_value():
            missing.append("SUPABASE_API_KEY")
        logger.info("[SUPABASE] Disabled - missing env vars: %s", ", ".join(missing))
        return None

    try:
        return create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_API_KEY.get_secret_value(),
        )
    except Exception as e:
        logger.error("[SUPABASE] Failed to create client: %s", e)
        return None
