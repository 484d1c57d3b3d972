"""
Configuration management for the CT/MRI analyser.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for ingestion and logging options.
"""

from ctmri_analyzer.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
