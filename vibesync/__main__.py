"""
vibesync.__main__ — Entry point for ``python -m vibesync``
===========================================================

Wiring:
1. Load .env.
2. Load config.yaml (port, gameplay tuning).
3. Start uvicorn on the FastAPI app (blocking).

Run with::

    python -m vibesync
"""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from vibesync.config import load_config

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("vibesync")


def main() -> None:
    """Bootstrap and serve the VibeSync API."""
    load_dotenv()

    cfg = load_config()
    logger.info("Config loaded: %s (%s)", cfg.app_name, cfg.app_motto)

    logger.info("Starting VibeSync API on port %d…", cfg.api_port)
    uvicorn.run("vibesync.api.main:app", host="0.0.0.0", port=cfg.api_port, log_config=None)


if __name__ == "__main__":
    main()
