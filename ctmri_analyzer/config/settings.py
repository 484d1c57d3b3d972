"""
Application settings.

Responsibilities:
- Collect the environment-driven options (ingestion resize bounds, logging)
  into one typed, immutable object.
- Classifier weights are deliberately absent: they are compiled-in constants
  in ctmri_analyzer.analysis_engine.scorer.
"""

from __future__ import annotations

from dataclasses import dataclass

from ctmri_analyzer.config.env import (
    get_log_format,
    get_log_level,
    get_max_side,
    get_min_side,
)


@dataclass(frozen=True)
class Settings:
    """Runtime options for the ingestion layer and logging."""

    max_side: int
    """Longest side (pixels) an image is scaled down to before analysis."""
    min_side: int
    """Smallest width/height (pixels) an image is scaled up to."""
    log_level: str
    log_format: str


def get_settings() -> Settings:
    """
    Return the current application settings, read fresh from the environment.

    Returns:
        Settings with max_side, min_side, log_level and log_format.
    """
    return Settings(
        max_side=get_max_side(),
        min_side=get_min_side(),
        log_level=get_log_level(),
        log_format=get_log_format(),
    )
