"""
Core utilities — the shared exception taxonomy used across the raster,
analysis engine, ingestion and CLI layers.
"""

from ctmri_analyzer.core.exceptions import (
    AnalysisError,
    DegenerateInputError,
    InvalidInputError,
    ModelNotInitializedError,
)

__all__ = [
    "AnalysisError",
    "DegenerateInputError",
    "InvalidInputError",
    "ModelNotInitializedError",
]
