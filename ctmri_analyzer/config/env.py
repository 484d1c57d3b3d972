"""
Environment variable loading for the CT/MRI analyser.

- CTMRI_MAX_SIDE: longest-side cap (pixels) applied when decoding images (default: 512)
- CTMRI_MIN_SIDE: minimum width/height (pixels) after resizing (default: 64)
- LOG_LEVEL / LOG_FORMAT: read by ctmri_analyzer.ctmri_logging
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from ctmri_analyzer.ctmri_logging import get_logger

logger = get_logger(__name__)

# Project root: config is ctmri_analyzer/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_MAX_SIDE = 512
DEFAULT_MIN_SIDE = 64


def load_ctmri_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set vars."""
    load_dotenv(_ENV_PATH, override=False)


def _get_positive_int(name: str, default: int) -> int:
    """Read a positive integer env var; fall back to default on missing or bad values."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("config_invalid_int", name=name, value=raw, default=default)
        return default
    if value < 1:
        logger.warning("config_non_positive_int", name=name, value=value, default=default)
        return default
    return value


def get_max_side() -> int:
    """Return CTMRI_MAX_SIDE from env (default 512)."""
    load_ctmri_env()
    return _get_positive_int("CTMRI_MAX_SIDE", DEFAULT_MAX_SIDE)


def get_min_side() -> int:
    """Return CTMRI_MIN_SIDE from env (default 64)."""
    load_ctmri_env()
    return _get_positive_int("CTMRI_MIN_SIDE", DEFAULT_MIN_SIDE)


def get_log_level() -> str:
    load_ctmri_env()
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()


def get_log_format() -> str:
    load_ctmri_env()
    return (os.getenv("LOG_FORMAT") or "json").strip().lower()
