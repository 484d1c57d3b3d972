"""
Data models for analysis engine output.

Responsibilities:
- Define the per-feature contribution and the final analysis result.
- Used by the scorer, the explainer, the CLI and any presentation layer;
  field names of to_dict() are the output contract.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

BIAS_FEATURE = "bias"
LABEL_CT = "CT"
LABEL_MRI = "MRI"
# Downstream UIs format probability relative to this; do not change silently
CT_THRESHOLD = 0.5


def label_for_probability(probability: float) -> str:
    """CT iff probability >= CT_THRESHOLD."""
    return LABEL_CT if probability >= CT_THRESHOLD else LABEL_MRI


@dataclass(frozen=True)
class Contribution:
    """One signed term of the classifier's linear score."""

    feature: str
    """Canonical feature name, or "bias"."""
    value: float
    """Raw feature value (0 for bias)."""
    contribution: float
    """weight * value, or the bias constant."""

    @property
    def is_bias(self) -> bool:
        return self.feature == BIAS_FEATURE

    def to_dict(self) -> dict[str, Any]:
        return {
            "feature": self.feature,
            "value": self.value,
            "contribution": self.contribution,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Verdict for one slice: label, CT probability, rationale and linear terms."""

    label: str
    probability: float
    rationale: tuple[str, ...]
    contributions: tuple[Contribution, ...]

    @property
    def linear_score(self) -> float:
        return math.fsum(c.contribution for c in self.contributions)

    def feature_contributions(self) -> tuple[Contribution, ...]:
        """Contributions without the bias row, as shown in feature tables."""
        return tuple(c for c in self.contributions if not c.is_bias)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable wire form; stable key order for downstream."""
        return {
            "label": self.label,
            "probability": self.probability,
            "rationale": list(self.rationale),
            "contributions": [c.to_dict() for c in self.contributions],
        }
