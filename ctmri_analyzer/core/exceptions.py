"""
Application-level exceptions.

Responsibilities:
- Define the analysis failures (invalid raster, degenerate intensity
  distribution, missing classifier model).
- Give callers one base class (AnalysisError) to translate into a
  user-facing message.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every failure raised by the analyser."""


class InvalidInputError(AnalysisError, ValueError):
    """Malformed or empty raster (zero dimensions, mismatched buffer length, bad samples) or undecodable image."""


class DegenerateInputError(AnalysisError, ArithmeticError):
    """
    Intensity distribution with zero spread; higher moments are undefined.

    Recovered inside the feature extractor by substituting 0, never surfaced
    to callers of extract_features.
    """


class ModelNotInitializedError(AnalysisError, RuntimeError):
    """Classifier invoked without model constants."""
