"""
Analysis engine package — CT vs MRI slice classification.

Consumes a decoded raster, extracts six texture descriptors, applies a
fixed calibrated logistic model and explains the verdict by ranking the
per-feature contributions.
"""

from ctmri_analyzer.analysis_engine.raster import RasterBuffer
from ctmri_analyzer.analysis_engine.features import (
    FEATURE_NAMES,
    FEATURE_ORDER,
    Feature,
    FeatureVector,
    compute_descriptors,
    extract_features,
    to_grayscale,
)
from ctmri_analyzer.analysis_engine.models import (
    BIAS_FEATURE,
    CT_THRESHOLD,
    LABEL_CT,
    LABEL_MRI,
    AnalysisResult,
    Contribution,
    label_for_probability,
)
from ctmri_analyzer.analysis_engine.scorer import (
    DEFAULT_MODEL,
    ClassifierModel,
    logistic,
    logit,
    score_features,
)
from ctmri_analyzer.analysis_engine.reasons import (
    TOP_N_REASONS,
    explain,
    humanize_feature,
    modality_name,
    probability_label,
)
from ctmri_analyzer.analysis_engine.pipeline import analyze_raster

__all__ = [
    "RasterBuffer",
    "FEATURE_NAMES",
    "FEATURE_ORDER",
    "Feature",
    "FeatureVector",
    "compute_descriptors",
    "extract_features",
    "to_grayscale",
    "BIAS_FEATURE",
    "CT_THRESHOLD",
    "LABEL_CT",
    "LABEL_MRI",
    "AnalysisResult",
    "Contribution",
    "label_for_probability",
    "DEFAULT_MODEL",
    "ClassifierModel",
    "logistic",
    "logit",
    "score_features",
    "TOP_N_REASONS",
    "explain",
    "humanize_feature",
    "modality_name",
    "probability_label",
    "analyze_raster",
]
