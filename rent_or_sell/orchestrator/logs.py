# rent_or_sell/orchestrator/logs.py
"""
Logging helpers for CLI runs.

- configure_logging(verbose): stderr handler on the package logger.
- get_debug_logger(): rotating file log under ./logs, attached when RENTSELL_DEBUG is on.

Logging problems never break a run.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

PACKAGE_LOGGER = "rent_or_sell"
DEBUG_LOG_PATH = os.path.join("logs", "rent_or_sell_debug.log")

_FILE_HANDLER: logging.Handler | None = None


def debug_enabled() -> bool:
    return os.getenv("RENTSELL_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _file_handler() -> logging.Handler | None:
    """Create/reuse the rotating debug file handler."""
    global _FILE_HANDLER
    if _FILE_HANDLER is not None:
        return _FILE_HANDLER

    try:
        os.makedirs(os.path.dirname(DEBUG_LOG_PATH), exist_ok=True)
        handler = RotatingFileHandler(DEBUG_LOG_PATH, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        # No file log; stderr keeps working
        return None

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="(%Y-%m-%d %H:%M:%S)",
        )
    )
    handler.setLevel(logging.DEBUG)
    _FILE_HANDLER = handler
    return handler


def get_debug_logger() -> logging.Logger:
    """Package logger with the rotating file handler attached (idempotent)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = _file_handler()
    if handler is not None and handler not in logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger (once).

    verbose → DEBUG on stderr, else WARNING. RENTSELL_DEBUG=1 also writes DEBUG to the file log.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.DEBUG if verbose else logging.WARNING

    if not any(getattr(h, "_rent_or_sell_stderr", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handler._rent_or_sell_stderr = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    for h in logger.handlers:
        if getattr(h, "_rent_or_sell_stderr", False):
            h.setLevel(level)

    logger.setLevel(logging.DEBUG if (verbose or debug_enabled()) else logging.INFO)
    if debug_enabled():
        get_debug_logger()
    return logger
