"""
Image ingestion — decode an image file into a RasterBuffer.

Responsibilities:
- Decode PNG/JPEG (anything Pillow reads) and convert to RGBA.
- Bound analysis cost: scale the longest side down to max_side, and keep
  each side at least min_side so small thumbnails still have texture.
- Reject undecodable input with InvalidInputError.

This is the only layer that touches file bytes; the analysis engine sees
decoded pixels only.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from ctmri_analyzer.analysis_engine.raster import RasterBuffer
from ctmri_analyzer.config import get_settings
from ctmri_analyzer.core.exceptions import InvalidInputError
from ctmri_analyzer.ctmri_logging import get_logger

logger = get_logger(__name__)


def target_size(width: int, height: int, max_side: int, min_side: int) -> tuple[int, int]:
    """
    Output size for a width x height image.

    scale = min(max_side / width, max_side / height, 1), then each side is
    rounded and raised to at least min_side (aspect ratio is not kept there).
    """
    if width < 1 or height < 1:
        raise InvalidInputError(f"image must be at least 1x1, got {width}x{height}")
    scale = min(max_side / width, max_side / height, 1.0)
    return (
        max(min_side, int(round(width * scale))),
        max(min_side, int(round(height * scale))),
    )


def image_to_raster(
    image: Image.Image,
    *,
    max_side: int | None = None,
    min_side: int | None = None,
) -> RasterBuffer:
    """Resize an already-open Pillow image and return its RGBA raster."""
    if max_side is None or min_side is None:
        settings = get_settings()
        max_side = settings.max_side if max_side is None else max_side
        min_side = settings.min_side if min_side is None else min_side

    size = target_size(image.width, image.height, max_side, min_side)
    rgba = image.convert("RGBA")
    if size != rgba.size:
        logger.debug(
            "image_resized",
            original=f"{image.width}x{image.height}",
            resized=f"{size[0]}x{size[1]}",
        )
        rgba = rgba.resize(size, Image.Resampling.BILINEAR)
    return RasterBuffer.from_array(np.asarray(rgba, dtype=np.uint8))


def load_raster(
    source: str | Path | BinaryIO,
    *,
    max_side: int | None = None,
    min_side: int | None = None,
) -> RasterBuffer:
    """
    Decode an image from a path or binary file object into a RasterBuffer.

    Args:
        source: Path to the image, or an open binary file object.
        max_side: Longest-side cap; defaults to settings (CTMRI_MAX_SIDE).
        min_side: Minimum side; defaults to settings (CTMRI_MIN_SIDE).

    Raises:
        InvalidInputError: the file is missing or not a decodable image.
    """
    try:
        with Image.open(source) as image:
            image.load()
            return image_to_raster(image, max_side=max_side, min_side=min_side)
    except FileNotFoundError as e:
        raise InvalidInputError(f"image not found: {source}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidInputError(f"not a readable CT or MRI image: {e}") from e
