"""
CT probability computation — calibrated linear model over texture features.

Responsibilities:
- Hold the fixed classifier constants (one weight per feature plus a bias).
- Turn a FeatureVector into a CT probability via the logistic function.
- Return the per-feature linear terms so the decision can be explained.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ctmri_analyzer.analysis_engine.features import FEATURE_ORDER, Feature, FeatureVector
from ctmri_analyzer.analysis_engine.models import BIAS_FEATURE, Contribution
from ctmri_analyzer.core.exceptions import ModelNotInitializedError


@dataclass(frozen=True)
class ClassifierModel:
    """
    Logistic regression constants, calibrated offline.

    weights follow FEATURE_ORDER. Positive weights push toward CT, negative
    toward MRI.
    """

    weights: tuple[float, ...]
    bias: float

    def __post_init__(self) -> None:
        if len(self.weights) != len(FEATURE_ORDER):
            raise ValueError(
                f"expected {len(FEATURE_ORDER)} weights, got {len(self.weights)}"
            )
        if not all(math.isfinite(w) for w in self.weights) or not math.isfinite(self.bias):
            raise ValueError("classifier constants must be finite")

    def weight(self, feature: Feature | str) -> float:
        return self.weights[FEATURE_ORDER.index(Feature(feature))]


# Calibrated constants (explainable, fixed)
# CT slices: dark field, sharp bone edges, bright outliers -> high contrast, edges, skew
# MRI slices: smooth soft-tissue gradients -> more grey levels, higher entropy
DEFAULT_MODEL = ClassifierModel(
    weights=(
        -1.20,  # meanBrightness
        3.40,  # contrastVariance
        2.10,  # edgeDensity
        6.00,  # highFrequencyEnergy
        -2.80,  # entropy
        0.65,  # skewness
    ),
    bias=-0.35,
)


def logistic(z: float) -> float:
    """1 / (1 + e^-z), branching on sign so exp never overflows."""
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def logit(p: float) -> float:
    """Inverse of logistic. p must lie strictly inside (0, 1)."""
    if not 0.0 < p < 1.0:
        raise ValueError(f"logit undefined for p={p!r}")
    return math.log(p) - math.log1p(-p)


def linear_terms(
    features: FeatureVector,
    model: ClassifierModel | None = DEFAULT_MODEL,
) -> list[Contribution]:
    """
    Bias first, then weight * value for each feature in canonical order.

    Raises:
        ModelNotInitializedError: model is None.
    """
    if model is None:
        raise ModelNotInitializedError("classifier model constants are not loaded")
    terms = [Contribution(feature=BIAS_FEATURE, value=0.0, contribution=model.bias)]
    for feature, weight in zip(FEATURE_ORDER, model.weights):
        value = features[feature]
        terms.append(
            Contribution(feature=feature.value, value=value, contribution=weight * value)
        )
    return terms


def score_features(
    features: FeatureVector,
    model: ClassifierModel | None = DEFAULT_MODEL,
) -> tuple[float, list[Contribution]]:
    """
    Compute the CT probability for a feature vector.

    linear score = bias + sum(weight_i * value_i); probability = logistic(score).
    The returned contributions sum to the linear score.

    Args:
        features: Complete six-entry feature vector.
        model: Classifier constants; DEFAULT_MODEL unless testing a variant.

    Returns:
        (probability, contributions) with seven contributions, bias first.
    """
    contributions = linear_terms(features, model)
    linear_score = math.fsum(c.contribution for c in contributions)
    return logistic(linear_score), contributions
