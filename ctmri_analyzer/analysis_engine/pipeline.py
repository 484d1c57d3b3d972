"""
Analysis pipeline — raster to verdict.

Flow: extract_features(raster) -> score_features(features) -> explain(...)
-> AnalysisResult. Each step is pure; the pipeline adds the CT/MRI threshold
and one debug log line per analysis.
"""

from __future__ import annotations

from ctmri_analyzer.analysis_engine.features import extract_features
from ctmri_analyzer.analysis_engine.models import AnalysisResult, label_for_probability
from ctmri_analyzer.analysis_engine.raster import RasterBuffer
from ctmri_analyzer.analysis_engine.reasons import TOP_N_REASONS, explain
from ctmri_analyzer.analysis_engine.scorer import DEFAULT_MODEL, ClassifierModel, score_features
from ctmri_analyzer.ctmri_logging import get_logger

logger = get_logger(__name__)


def analyze_raster(
    raster: RasterBuffer,
    model: ClassifierModel | None = DEFAULT_MODEL,
    *,
    top_n: int = TOP_N_REASONS,
) -> AnalysisResult:
    """
    Classify one slice as CT or MRI and explain the decision.

    Raises:
        InvalidInputError: the raster is malformed.
        ModelNotInitializedError: model is None.
    """
    features = extract_features(raster)
    probability, contributions = score_features(features, model)
    label = label_for_probability(probability)
    rationale = explain(contributions, probability, top_n=top_n)

    logger.debug(
        "raster_analyzed",
        width=raster.width,
        height=raster.height,
        label=label,
        probability=round(probability, 6),
        features=features.to_dict(),
    )
    return AnalysisResult(
        label=label,
        probability=probability,
        rationale=tuple(rationale),
        contributions=tuple(contributions),
    )
