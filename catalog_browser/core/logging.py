"""Structured logging configuration for the catalog browser.

JSON lines for log aggregation in deployed environments, colored
single-line output for local development.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

EXTRA_FIELDS = ("source", "product_id", "duration_ms", "status_code", "total")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def __init__(
        self,
        *,
        include_path: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ):
        super().__init__()
        self.include_path = include_path
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_path:
            log_data["path"] = f"{record.pathname}:{record.lineno}"
            log_data["function"] = record.funcName

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        log_data.update(self.extra_fields)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class PrettyFormatter(logging.Formatter):
    """Single-line terminal output; catalog extras are appended as key=value.

    Example:
        12:01:07 WARNING catalog.resolver   [CATALOG:REST] list_products failed  source=rest
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    NAME_WIDTH = 18

    def __init__(self, *, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    @classmethod
    def _short_name(cls, name: str) -> str:
        # catalog_browser.services.catalog.resolver -> catalog.resolver
        short = ".".join(name.split(".")[-2:])
        return short[-cls.NAME_WIDTH :].ljust(cls.NAME_WIDTH)

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level}{self.RESET}"
        clock = datetime.fromtimestamp(record.created, UTC).strftime("%H:%M:%S")

        parts = [clock, level, self._short_name(record.name), record.getMessage()]
        extras = " ".join(
            f"{key}={getattr(record, key)}" for key in EXTRA_FIELDS if hasattr(record, key)
        )
        if extras:
            parts.append(f" {extras}")

        output = " ".join(parts)
        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"
        return output


def _resolve_level(level: str) -> int:
    name = level.strip().upper()
    if name == "WARN":
        name = "WARNING"
    return getattr(logging, name, logging.INFO)


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    include_path: bool = False,
    service_name: str = "catalog-browser",
) -> None:
    """Configure the root logger.

    Args:
        level: Minimum log level (debug, info, warning, error, critical)
        json_format: Use JSON format (True) or pretty format (False)
        include_path: Include source file path in JSON logs
        service_name: Service name added to every JSON line
    """
    root_logger = logging.getLogger()
    numeric_level = _resolve_level(level)
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter(
            include_path=include_path,
            extra_fields={"service": service_name},
        )
    else:
        formatter = PrettyFormatter(use_color=sys.stdout.isatty())

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    for noisy in ("httpx", "httpcore", "supabase", "postgrest", "hpack"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
