"""
Tests for the explainer: ranking, tie-breaking, phrasing and presentation helpers.
"""

from __future__ import annotations

import pytest

from ctmri_analyzer.analysis_engine import (
    TOP_N_REASONS,
    Contribution,
    explain,
    humanize_feature,
    modality_name,
    probability_label,
)
from ctmri_analyzer.analysis_engine.reasons import rank_contributions


def _contributions(*terms: tuple[str, float, float]) -> list[Contribution]:
    return [Contribution(feature=f, value=v, contribution=c) for f, v, c in terms]


SAMPLE = _contributions(
    ("bias", 0.0, -9.0),
    ("meanBrightness", 0.42, -0.504),
    ("contrastVariance", 0.06, 0.204),
    ("edgeDensity", 0.31, 0.651),
    ("highFrequencyEnergy", 0.02, 0.12),
    ("entropy", 0.81, -2.268),
    ("skewness", 1.3, 0.845),
)


def test_humanize_feature():
    assert humanize_feature("meanBrightness") == "Mean Brightness"
    assert humanize_feature("highFrequencyEnergy") == "High Frequency Energy"
    assert humanize_feature("entropy") == "Entropy"


def test_bias_is_never_ranked():
    """Bias has the largest magnitude here but is excluded."""
    ranked = rank_contributions(SAMPLE)
    assert all(c.feature != "bias" for c in ranked)
    assert len(ranked) == 6


def test_ranking_by_absolute_magnitude():
    ranked = rank_contributions(SAMPLE)
    assert [c.feature for c in ranked] == [
        "entropy",
        "skewness",
        "edgeDensity",
        "meanBrightness",
        "contrastVariance",
        "highFrequencyEnergy",
    ]


def test_ties_keep_canonical_order():
    """Equal magnitudes, opposite signs: canonical order wins."""
    tied = _contributions(
        ("bias", 0.0, 0.1),
        ("meanBrightness", 0.5, -0.5),
        ("contrastVariance", 0.1, 0.5),
        ("edgeDensity", 0.2, 0.5),
        ("highFrequencyEnergy", 0.0, 0.0),
        ("entropy", 0.5, -0.5),
        ("skewness", 0.0, 0.0),
    )
    assert [c.feature for c in rank_contributions(tied)] == [
        "meanBrightness",
        "contrastVariance",
        "edgeDensity",
        "entropy",
        "highFrequencyEnergy",
        "skewness",
    ]


def test_explain_emits_top_three_lines():
    lines = explain(SAMPLE, 0.2)
    assert TOP_N_REASONS == 3
    assert isinstance(lines, list)
    assert len(lines) == TOP_N_REASONS
    assert lines[0] == (
        "Entropy (0.810) points toward MRI (-2.268), in line with the overall verdict."
    )
    assert lines[1] == (
        "Skewness (1.300) points toward CT (+0.845), against the overall verdict."
    )
    assert lines[2].startswith("Edge Density (0.310) points toward CT")


def test_explain_agreement_follows_probability():
    """Same evidence reads as agreeing once the verdict flips to CT."""
    lines = explain(SAMPLE, 0.5)
    assert lines[0].endswith("against the overall verdict.")
    assert lines[1].endswith("in line with the overall verdict.")


def test_explain_top_n_override():
    assert len(explain(SAMPLE, 0.2, top_n=6)) == 6
    assert explain(SAMPLE, 0.2, top_n=0) == []


@pytest.mark.parametrize("top_n", [-1, -6])
def test_explain_rejects_negative_top_n(top_n):
    """A negative count must fail instead of slicing from the end."""
    with pytest.raises(ValueError, match="top_n must be non-negative"):
        explain(SAMPLE, 0.2, top_n=top_n)


def test_explain_is_stable():
    assert explain(SAMPLE, 0.3) == explain(SAMPLE, 0.3)
    assert explain(iter(SAMPLE), 0.3) == explain(list(SAMPLE), 0.3)


def test_zero_contribution_counts_as_ct_and_has_no_negative_zero():
    lines = explain(_contributions(("entropy", 0.0, -0.0)), 0.9)
    assert lines == ["Entropy (0.000) points toward CT (+0.000), in line with the overall verdict."]


@pytest.mark.parametrize(
    "label, probability, expected",
    [
        ("CT", 0.874, "87% CT likelihood"),
        ("CT", 0.5, "50% CT likelihood"),
        ("MRI", 0.36, "64% MRI likelihood"),
        ("MRI", 0.0, "100% MRI likelihood"),
    ],
)
def test_probability_label(label, probability, expected):
    assert probability_label(label, probability) == expected


def test_modality_name():
    assert modality_name("CT") == "Computed Tomography"
    assert modality_name("MRI") == "Magnetic Resonance Imaging"
