"""
Raster buffer — the decoded pixel grid handed to the analysis engine.

A RasterBuffer is produced once by an image decoder (see
ctmri_analyzer.ingestion) or by a caller holding raw pixel data, and is never
mutated afterwards: the sample array is copied and made read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from ctmri_analyzer.core.exceptions import InvalidInputError

MAX_SAMPLE = 255.0
RGBA_CHANNELS = 4
# (H, W) grayscale, (H, W, 3) RGB, (H, W, 4) RGBA
SUPPORTED_CHANNELS = (1, 3, 4)


@dataclass(frozen=True, eq=False)
class RasterBuffer:
    """
    Immutable W x H pixel grid with intensities in [0, 255].

    pixels has shape (height, width, channels) with channels in
    SUPPORTED_CHANNELS; a grayscale raster has a single channel.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidInputError(
                f"raster must be at least 1x1, got {self.width}x{self.height}"
            )
        if self.pixels.ndim != 3 or self.pixels.shape[:2] != (self.height, self.width):
            raise InvalidInputError(
                f"pixel array shape {self.pixels.shape} does not match {self.width}x{self.height}"
            )
        if self.pixels.shape[2] not in SUPPORTED_CHANNELS:
            raise InvalidInputError(f"unsupported channel count: {self.pixels.shape[2]}")
        if self.pixels.flags.writeable:
            frozen = np.array(self.pixels, dtype=np.float64)
            frozen.setflags(write=False)
            object.__setattr__(self, "pixels", frozen)

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def is_grayscale(self) -> bool:
        return self.channels == 1

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @classmethod
    def from_array(cls, array: Any) -> RasterBuffer:
        """
        Build a raster from a numeric array.

        Accepts (H, W) grayscale, (H, W, 3) RGB or (H, W, 4) RGBA data. Samples
        must be finite and within [0, 255]; the data is copied to float64 and
        frozen.
        """
        try:
            data = np.array(array, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"pixel data is not numeric: {e}") from e

        if data.ndim == 2:
            data = data[:, :, np.newaxis]
        if data.ndim != 3:
            raise InvalidInputError(f"expected a 2-D or 3-D pixel array, got {data.ndim}-D")
        height, width = data.shape[0], data.shape[1]
        if width == 0 or height == 0:
            raise InvalidInputError(f"raster must be at least 1x1, got {width}x{height}")
        _check_samples(data)

        data.setflags(write=False)
        return cls(width=width, height=height, pixels=data)

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes | bytearray | memoryview) -> RasterBuffer:
        """
        Build a raster from a flat RGBA byte sequence (row-major, 4 bytes per pixel).

        This is the layout of a browser canvas ImageData buffer.
        """
        if width < 1 or height < 1:
            raise InvalidInputError(f"raster must be at least 1x1, got {width}x{height}")
        expected = width * height * RGBA_CHANNELS
        if len(data) != expected:
            raise InvalidInputError(
                f"RGBA buffer length {len(data)} does not match {width}x{height}x{RGBA_CHANNELS}={expected}"
            )
        flat = np.frombuffer(bytes(data), dtype=np.uint8)
        return cls.from_array(flat.reshape(height, width, RGBA_CHANNELS))


def _check_samples(data: np.ndarray) -> None:
    """Reject NaN/inf and out-of-range samples."""
    if not np.all(np.isfinite(data)):
        raise InvalidInputError("pixel data contains non-finite samples")
    if data.size and (data.min() < 0.0 or data.max() > MAX_SAMPLE):
        raise InvalidInputError(
            f"pixel samples must lie in [0, {MAX_SAMPLE:g}], got [{data.min():g}, {data.max():g}]"
        )
