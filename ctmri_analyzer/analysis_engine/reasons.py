"""
Reason engine — turn classifier contributions into readable rationale.

Ranks the per-feature linear terms by magnitude (bias excluded), keeps the
top N and phrases each as evidence toward CT or MRI. Also holds the small
presentation helpers a UI needs to render a verdict.
"""

from __future__ import annotations

import re
from typing import Iterable

from ctmri_analyzer.analysis_engine.models import (
    LABEL_CT,
    LABEL_MRI,
    Contribution,
    label_for_probability,
)

TOP_N_REASONS = 3

MODALITY_NAMES = {
    LABEL_CT: "Computed Tomography",
    LABEL_MRI: "Magnetic Resonance Imaging",
}

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def humanize_feature(name: str) -> str:
    """'highFrequencyEnergy' -> 'High Frequency Energy'."""
    spaced = _CAMEL_BOUNDARY.sub(r" \1", name).strip()
    return spaced[:1].upper() + spaced[1:]


def modality_name(label: str) -> str:
    return MODALITY_NAMES[label]


def probability_label(label: str, probability: float) -> str:
    """
    Likelihood text for a verdict, e.g. '87% CT likelihood' or '64% MRI likelihood'.

    The CT percentage is rounded first; the MRI percentage is its complement
    so the two always add up to 100.
    """
    pct = int(round(probability * 100))
    if label == LABEL_CT:
        return f"{pct}% CT likelihood"
    return f"{100 - pct}% MRI likelihood"


def rank_contributions(contributions: Iterable[Contribution]) -> list[Contribution]:
    """
    Feature contributions by descending magnitude, bias dropped.

    sorted() is stable, so equal magnitudes keep canonical feature order.
    """
    features = [c for c in contributions if not c.is_bias]
    return sorted(features, key=lambda c: -abs(c.contribution))


def _reason_line(item: Contribution, verdict: str) -> str:
    direction = LABEL_CT if item.contribution >= 0 else LABEL_MRI
    agreement = "in line with" if direction == verdict else "against"
    # weight * 0.0 can be -0.0
    shown = item.contribution if item.contribution != 0 else 0.0
    return (
        f"{humanize_feature(item.feature)} ({item.value:.3f}) points toward {direction} "
        f"({shown:+.3f}), {agreement} the overall verdict."
    )


def explain(
    contributions: Iterable[Contribution],
    probability: float,
    *,
    top_n: int = TOP_N_REASONS,
) -> list[str]:
    """
    Build rationale lines for the top_n strongest feature contributions.

    Args:
        contributions: Linear terms from score_features (bias may be included).
        probability: CT probability; decides whether each line agrees with the verdict.
        top_n: Number of lines to emit (default TOP_N_REASONS).

    Raises:
        ValueError: top_n is negative.

    Returns:
        Fully materialised list of rationale strings, strongest first.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")
    verdict = label_for_probability(probability)
    ranked = rank_contributions(contributions)
    return [_reason_line(item, verdict) for item in ranked[:top_n]]
