"""Serve the catalog HTTP API with uvicorn.

HOST and PORT come from the environment (defaults 0.0.0.0:8000); everything
else from ``Settings``.
"""

import logging
import os

import uvicorn

from catalog_browser.conf.config import get_settings
from catalog_browser.core.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8000))
    logger.info("Starting catalog server on %s:%d", host, port)

    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(
        "catalog_browser.server.main:app",
        host=host,
        port=port,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_config=None,
    )


if __name__ == "__main__":
    main()
