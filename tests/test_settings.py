"""
Tests for environment-driven settings.
"""

from __future__ import annotations

import dataclasses

import pytest

from ctmri_analyzer.config import get_settings


def test_defaults(monkeypatch):
    for name in ("CTMRI_MAX_SIDE", "CTMRI_MIN_SIDE", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.max_side == 512
    assert settings.min_side == 64
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CTMRI_MAX_SIDE", "1024")
    monkeypatch.setenv("CTMRI_MIN_SIDE", " 32 ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "Console")
    settings = get_settings()
    assert (settings.max_side, settings.min_side) == (1024, 32)
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "console"


@pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5"])
def test_invalid_sizes_fall_back(monkeypatch, raw):
    monkeypatch.setenv("CTMRI_MAX_SIDE", raw)
    assert get_settings().max_side == 512


def test_settings_are_frozen():
    settings = get_settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.max_side = 1  # type: ignore[misc]
