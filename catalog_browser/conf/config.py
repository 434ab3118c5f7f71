"""Configuration for the catalog browser.

Reads environment variables for backend access and runtime tuning.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

FORCE_MOCK_FLAG = "mock_api"
LOG_LEVELS = ("debug", "info", "warning", "warn", "error", "critical")


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    CATALOG_API_BASE: str = Field(
        default="", description="Base URL of the REST catalog backend (e.g. https://api.example.com)."
    )

    SUPABASE_URL: str = Field(
        default="", description="Supabase project URL for the managed product store."
    )
    SUPABASE_API_KEY: SecretStr = Field(
        default=SecretStr(""), description="Anon or service key for Supabase client."
    )
    SUPABASE_PRODUCTS_TABLE: str = Field(
        default="products", description="Table holding product rows."
    )

    FEATURE_FLAGS: str = Field(
        default="",
        description=(
            "Comma-separated feature flags (case-insensitive). "
            "'mock_api' forces the in-memory catalog and skips every remote backend."
        ),
    )

    LOG_LEVEL: str = Field(default="info", description="Minimum log level.")
    LOG_JSON: bool = Field(
        default=False, description="Emit JSON log lines instead of pretty terminal output."
    )

    DEFAULT_PAGE_SIZE: int = Field(
        default=12, gt=0, description="Page size used when the caller does not provide one."
    )
    MOCK_CATALOG_SEED: int | None = Field(
        default=None,
        description="Seed for the generated catalog. Unset means a fresh seed per process.",
    )
    REST_TIMEOUT_SECONDS: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for REST backend calls. Unset disables the timeout.",
    )

    @field_validator("CATALOG_API_BASE", "SUPABASE_URL")
    @classmethod
    def _strip_url(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def feature_flags(self) -> frozenset[str]:
        """Return parsed feature flags, lowercased."""
        return frozenset(
            segment.strip().lower() for segment in self.FEATURE_FLAGS.split(",") if segment.strip()
        )

    @property
    def force_mock(self) -> bool:
        return FORCE_MOCK_FLAG in self.feature_flags

    @property
    def supabase_enabled(self) -> bool:
        """Check if the managed store is configured."""
        return bool(self.SUPABASE_URL and self.SUPABASE_API_KEY.get_secret_value())

    @property
    def rest_enabled(self) -> bool:
        return bool(self.CATALOG_API_BASE)

    @property
    def rest_base_url(self) -> str:
        """REST base URL without trailing slashes."""
        return self.CATALOG_API_BASE.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[arg-type]


def validate_settings(settings_instance: Settings | None = None) -> list[str]:
    """Check settings for suspicious values.

    Returns the list of warnings (each one is also logged). Raises
    RuntimeError only for values that make startup impossible.
    """
    if settings_instance is None:
        settings_instance = get_settings()

    warnings: list[str] = []

    if settings_instance.LOG_LEVEL.strip().lower() not in LOG_LEVELS:
        raise RuntimeError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {settings_instance.LOG_LEVEL!r}"
        )

    base = settings_instance.CATALOG_API_BASE
    if base and not base.startswith(("http://", "https://")):
        warnings.append("CATALOG_API_BASE has no http(s) scheme; REST requests will fail")

    has_url = bool(settings_instance.SUPABASE_URL)
    has_key = bool(settings_instance.SUPABASE_API_KEY.get_secret_value())
    if has_url != has_key:
        missing = "SUPABASE_API_KEY" if has_url else "SUPABASE_URL"
        warnings.append(f"Supabase half-configured ({missing} missing); managed store disabled")

    if settings_instance.force_mock and (settings_instance.supabase_enabled or base):
        warnings.append("FEATURE_FLAGS contains 'mock_api'; configured backends are ignored")

    for warning in warnings:
        logger.warning("Configuration warning: %s", warning)

    return warnings


settings = get_settings()
