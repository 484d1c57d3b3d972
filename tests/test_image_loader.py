"""
Tests for image ingestion: Pillow decoding and resize bounds.
"""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from ctmri_analyzer.core.exceptions import InvalidInputError
from ctmri_analyzer.ingestion import image_to_raster, load_raster, target_size


def _save(path, image: Image.Image) -> str:
    image.save(path)
    return str(path)


@pytest.mark.parametrize(
    "size, expected",
    [
        ((1024, 512), (512, 256)),
        ((300, 200), (300, 200)),
        ((10, 10), (64, 64)),
        ((2000, 40), (512, 64)),
    ],
)
def test_target_size(size, expected):
    """Longest side capped at 512, every side at least 64, never upscaled otherwise."""
    assert target_size(*size, max_side=512, min_side=64) == expected


def test_target_size_rejects_empty():
    with pytest.raises(InvalidInputError):
        target_size(0, 10, max_side=512, min_side=64)


def test_load_large_png_is_downscaled(tmp_path):
    path = _save(tmp_path / "large.png", Image.new("RGB", (1024, 512), (90, 90, 90)))
    raster = load_raster(path, max_side=512, min_side=64)
    assert (raster.width, raster.height, raster.channels) == (512, 256, 4)
    assert np.all(raster.pixels[..., 3] == 255)


def test_load_small_png_is_upscaled(tmp_path):
    path = _save(tmp_path / "small.png", Image.new("L", (8, 8), 40))
    raster = load_raster(path, max_side=512, min_side=64)
    assert (raster.width, raster.height) == (64, 64)
    assert np.all(raster.pixels[..., :3] == 40)


def test_load_from_file_object():
    buffer = io.BytesIO()
    Image.new("RGB", (100, 80), (0, 128, 255)).save(buffer, format="JPEG")
    buffer.seek(0)
    raster = load_raster(buffer, max_side=512, min_side=64)
    assert (raster.width, raster.height) == (100, 80)


def test_settings_supply_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("CTMRI_MAX_SIDE", "128")
    monkeypatch.setenv("CTMRI_MIN_SIDE", "16")
    path = _save(tmp_path / "wide.png", Image.new("RGB", (512, 256)))
    raster = load_raster(path)
    assert (raster.width, raster.height) == (128, 64)


def test_image_to_raster_keeps_pixels_when_no_resize():
    image = Image.new("RGBA", (70, 70), (10, 20, 30, 40))
    raster = image_to_raster(image, max_side=512, min_side=64)
    assert raster.pixels[0, 0].tolist() == [10.0, 20.0, 30.0, 40.0]


def test_non_image_rejected(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image", encoding="utf-8")
    with pytest.raises(InvalidInputError, match="not a readable"):
        load_raster(path)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(InvalidInputError, match="not found"):
        load_raster(tmp_path / "missing.png")
