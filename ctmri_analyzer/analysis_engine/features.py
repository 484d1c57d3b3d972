"""
Texture feature extraction from a decoded imaging slice.

Converts a RasterBuffer into a fixed six-entry feature vector computed from
grayscale intensity only: mean brightness, contrast variance, edge density,
high-frequency energy, histogram entropy and skewness. No scoring logic;
output feeds the linear classifier in scorer.py.

The formulas below are pinned: the classifier weights are calibrated against
them, so luminance weights, bin count, Laplacian kernel and edge threshold
must not change without recalibrating.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

import numpy as np
from scipy import ndimage

from ctmri_analyzer.analysis_engine.raster import RasterBuffer
from ctmri_analyzer.core.exceptions import DegenerateInputError, InvalidInputError

# ITU-R BT.601 luma in per-mille so that white maps to exactly 255.0
LUMA_WEIGHTS_PERMILLE = (299, 587, 114)
MAX_INTENSITY = 255.0
# Neighbour difference (out of 255) above which a pixel counts as an edge
EDGE_THRESHOLD = 24.0
HISTOGRAM_BINS = 256
# Mean squared Laplacian is divided by this to land typical slices in [0, 1]
HIGH_FREQUENCY_NORM = MAX_INTENSITY**2
# Standard deviations at or below this make skewness undefined
DEGENERATE_STD_EPSILON = 1e-9


class Feature(str, Enum):
    """Closed set of texture descriptors, in canonical order."""

    MEAN_BRIGHTNESS = "meanBrightness"
    CONTRAST_VARIANCE = "contrastVariance"
    EDGE_DENSITY = "edgeDensity"
    HIGH_FREQUENCY_ENERGY = "highFrequencyEnergy"
    ENTROPY = "entropy"
    SKEWNESS = "skewness"


FEATURE_ORDER: tuple[Feature, ...] = tuple(Feature)
FEATURE_NAMES: tuple[str, ...] = tuple(f.value for f in FEATURE_ORDER)


@dataclass(frozen=True)
class FeatureVector:
    """
    Six texture descriptors of one slice, in canonical order.

    All values are derived from the grayscale intensity array only; identical
    pixels always give identical vectors.
    """

    mean_brightness: float
    """Mean intensity / 255, in [0, 1]."""
    contrast_variance: float
    """Population variance of intensity / 255**2, in [0, 0.25]."""
    edge_density: float
    """Fraction of pixels with a 4-neighbour differing by more than EDGE_THRESHOLD."""
    high_frequency_energy: float
    """Mean squared 5-point Laplacian / HIGH_FREQUENCY_NORM."""
    entropy: float
    """Shannon entropy of the 256-bin histogram / 8 bits, in [0, 1]."""
    skewness: float
    """Third standardized moment; 0 for flat images."""

    def values(self) -> tuple[float, ...]:
        return (
            self.mean_brightness,
            self.contrast_variance,
            self.edge_density,
            self.high_frequency_energy,
            self.entropy,
            self.skewness,
        )

    def items(self) -> Iterator[tuple[Feature, float]]:
        """Yield (feature, value) pairs in canonical order."""
        return zip(FEATURE_ORDER, self.values())

    def __getitem__(self, feature: Feature | str) -> float:
        return self.values()[FEATURE_ORDER.index(Feature(feature))]

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values(), dtype=np.float64)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable feature vector; stable key order for downstream."""
        return {feature.value: value for feature, value in self.items()}


def to_grayscale(raster: RasterBuffer) -> np.ndarray:
    """
    Collapse a raster to a (height, width) float64 intensity array.

    RGB(A) uses the BT.601 luma weights; alpha is ignored. A single-channel
    raster is returned as-is.
    """
    pixels = raster.pixels
    if raster.is_grayscale:
        return np.array(pixels[:, :, 0], dtype=np.float64)
    wr, wg, wb = LUMA_WEIGHTS_PERMILLE
    weighted = wr * pixels[:, :, 0] + wg * pixels[:, :, 1] + wb * pixels[:, :, 2]
    return weighted / 1000.0


def _edge_density(gray: np.ndarray) -> float:
    """Fraction of pixels with at least one 4-connected neighbour differing by > EDGE_THRESHOLD."""
    edges = np.zeros(gray.shape, dtype=bool)

    horizontal = np.abs(np.diff(gray, axis=1)) > EDGE_THRESHOLD
    edges[:, :-1] |= horizontal
    edges[:, 1:] |= horizontal

    vertical = np.abs(np.diff(gray, axis=0)) > EDGE_THRESHOLD
    edges[:-1, :] |= vertical
    edges[1:, :] |= vertical

    return float(edges.mean())


def _high_frequency_energy(gray: np.ndarray) -> float:
    """Mean squared 5-point Laplacian with replicated borders, normalized."""
    laplacian = ndimage.laplace(gray, mode="nearest")
    return float(np.mean(laplacian**2) / HIGH_FREQUENCY_NORM)


def _histogram_entropy(gray: np.ndarray) -> float:
    """Shannon entropy of the 256-bin intensity histogram, as a fraction of 8 bits."""
    clipped = np.clip(gray, 0.0, MAX_INTENSITY)
    counts, _ = np.histogram(clipped, bins=HISTOGRAM_BINS, range=(0.0, float(HISTOGRAM_BINS)))
    p = counts[counts > 0] / gray.size
    bits = float(np.sum(p * np.log2(1.0 / p)))
    return bits / math.log2(HISTOGRAM_BINS)


def _skewness(gray: np.ndarray, mean: float, std: float) -> float:
    """Third standardized moment. Raises DegenerateInputError for flat images."""
    if std <= DEGENERATE_STD_EPSILON:
        raise DegenerateInputError(f"intensity standard deviation {std!r} is zero")
    return float(np.mean((gray - mean) ** 3) / std**3)


def compute_descriptors(gray: np.ndarray) -> FeatureVector:
    """
    Compute the six texture descriptors from a 2-D grayscale array.

    Intensities are nominally in [0, 255]; larger values are accepted (only
    the histogram clips them), so scaling an image never yields NaN.

    Args:
        gray: (height, width) intensity array, at least 1x1.

    Returns:
        FeatureVector in canonical order.
    """
    gray = np.asarray(gray, dtype=np.float64)
    if gray.ndim != 2 or gray.size == 0:
        raise InvalidInputError(f"expected a non-empty 2-D grayscale array, got shape {gray.shape}")

    mean = float(gray.mean())
    variance = float(gray.var())
    std = math.sqrt(variance)

    try:
        skewness = _skewness(gray, mean, std)
    except DegenerateInputError:
        skewness = 0.0

    return FeatureVector(
        mean_brightness=mean / MAX_INTENSITY,
        contrast_variance=variance / MAX_INTENSITY**2,
        edge_density=_edge_density(gray),
        high_frequency_energy=_high_frequency_energy(gray),
        entropy=_histogram_entropy(gray),
        skewness=skewness,
    )


def extract_features(raster: RasterBuffer) -> FeatureVector:
    """
    Convert a raster into its texture feature vector.

    Pure and deterministic: no randomness, no dependence on the source file
    or format. Rasters smaller than 1x1 are rejected by RasterBuffer itself.
    """
    if raster.width < 1 or raster.height < 1:
        raise InvalidInputError(f"raster must be at least 1x1, got {raster.width}x{raster.height}")
    return compute_descriptors(to_grayscale(raster))
