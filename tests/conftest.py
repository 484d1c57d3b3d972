"""
Pytest fixtures for analyser tests: synthetic rasters with known texture.
"""

from __future__ import annotations

import numpy as np
import pytest

from ctmri_analyzer.analysis_engine import RasterBuffer


def _rgba(gray: np.ndarray) -> np.ndarray:
    """Stack a grayscale array into opaque RGBA."""
    alpha = np.full(gray.shape, 255.0)
    return np.stack([gray, gray, gray, alpha], axis=-1)


@pytest.fixture
def black_raster() -> RasterBuffer:
    """4x4 all-black opaque raster."""
    return RasterBuffer.from_array(_rgba(np.zeros((4, 4))))


@pytest.fixture
def checkerboard_raster() -> RasterBuffer:
    """8x8 raster alternating 0 / 255."""
    rows, cols = np.indices((8, 8))
    gray = np.where((rows + cols) % 2 == 0, 0.0, 255.0)
    return RasterBuffer.from_array(_rgba(gray))


@pytest.fixture
def solid_raster() -> RasterBuffer:
    """5x3 raster of one RGB colour."""
    pixels = np.zeros((3, 5, 4))
    pixels[:, :] = (30, 120, 200, 255)
    return RasterBuffer.from_array(pixels)


@pytest.fixture
def blob_raster() -> RasterBuffer:
    """32x32 smooth Gaussian blob on a grey field (soft-tissue-like)."""
    rows, cols = np.indices((32, 32))
    r2 = (rows - 15.5) ** 2 + (cols - 15.5) ** 2
    gray = 60.0 + 120.0 * np.exp(-r2 / (2 * 8.0**2))
    return RasterBuffer.from_array(_rgba(gray))


@pytest.fixture
def textured_gray() -> np.ndarray:
    """8x8 deterministic grayscale pattern with values in [0, 99]."""
    return (np.arange(64, dtype=np.float64).reshape(8, 8) * 37) % 100


@pytest.fixture
def all_rasters(black_raster, checkerboard_raster, solid_raster, blob_raster) -> list[RasterBuffer]:
    return [black_raster, checkerboard_raster, solid_raster, blob_raster]
