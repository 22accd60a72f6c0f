"""Centralized runtime configuration.

Loads environment variables (and a local ``.env`` file) at import time and
exposes typed settings for the engines. Unparseable values fall back to
their defaults with a warning.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("[CONFIG] %s=%r is not a number — using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("[CONFIG] %s=%r is not an integer — using %s", name, raw, default)
        return default


# Policy ceiling for the auto-derived in-market rate (percent).
IN_MARKET_RATE_CEILING: float = _env_float("ABM_IN_MARKET_CEILING", 70.0)

# Inputs to the hazard-rate in-market derivation.
DEFAULT_BUYING_WINDOW_MONTHS: float = _env_float("ABM_BUYING_WINDOW_MONTHS", 3.0)
DEFAULT_POINT_IN_TIME_SHARE: float = _env_float("ABM_POINT_IN_TIME_SHARE", 0.05)

# >1 computes sensitivity cells on a thread pool.
SENSITIVITY_WORKERS: int = max(1, _env_int("ABM_SENSITIVITY_WORKERS", 1))

LOG_LEVEL: str = os.getenv("ABM_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


def configure_logging(level: str | None = None) -> None:
    """Apply ``ABM_LOG_LEVEL`` (or *level*) to the ``abm_roi`` logger tree."""
    name = (level or LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        logger.warning("[CONFIG] Unknown log level %r — using WARNING", name)
        resolved = logging.WARNING
    logging.getLogger("abm_roi").setLevel(resolved)
