"""
Overall Score and Integrity Calculator

Computes the 0-100 overall frame score and the integrity tier from
aggregated axis scores. Separated from aggregator.py for
single-responsibility.

Overall = mean of the four Tier 1 axes (locus of control, motivation
direction, process clarity, linguistic authority), rounded.

Integrity:
  placeholder  reference unavailable, nothing contributed, or no key
               axis moved off baseline
  partial      1-2 key axes moved
  live         3-4 key axes moved

Also holds the score merge used to blend in an external modality's
score, and the small presentation helpers built on the same outputs.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable

from intakeframe.aggregator import has_contributions
from intakeframe.models import (
    BASELINE,
    KEY_AXES,
    SCORE_MIN,
    ActiveFlag,
    Answer,
    Axis,
    FlagSeverity,
    Integrity,
    IntakeMetrics,
    clamp_score,
    round_score,
)
from intakeframe.reference import ReferenceSpec

# Engine score weight when blending with an external score
ENGINE_WEIGHT = 0.6
EXTERNAL_WEIGHT = 0.4

LIVE_MIN_ACTIVE_AXES = 3


def calculate_overall_score(axis_scores: dict[Axis, int]) -> int:
    """Unweighted mean of the key axes, rounded."""
    total = sum(axis_scores[axis] for axis in KEY_AXES)
    return round_score(total / len(KEY_AXES))


def active_key_axes(axis_scores: dict[Axis, int]) -> list[Axis]:
    """Key axes that moved off baseline. 0 is the degraded sentinel and does not count."""
    return [
        axis for axis in KEY_AXES
        if axis_scores[axis] not in (BASELINE, SCORE_MIN)
    ]


def calculate_integrity(
    axis_scores: dict[Axis, int],
    answers: Iterable[Answer],
    reference: ReferenceSpec,
) -> Integrity:
    if not reference.is_loaded:
        return Integrity.PLACEHOLDER

    active = active_key_axes(axis_scores)
    if not has_contributions(answers) or not active:
        return Integrity.PLACEHOLDER
    if len(active) >= LIVE_MIN_ACTIVE_AXES:
        return Integrity.LIVE
    return Integrity.PARTIAL


def merge_external_score(metrics: IntakeMetrics, external_score: float) -> IntakeMetrics:
    """
    Blend an externally computed 0-100 score into the overall score.

    overall = round(0.6 * overall + 0.4 * external). Every other field
    is carried over unchanged. The input metrics are not modified, so
    merging the same score into the same base always gives the same
    result.
    """
    external = clamp_score(external_score)
    blended = round_score(
        metrics.overall_score * ENGINE_WEIGHT + external * EXTERNAL_WEIGHT
    )
    return dataclasses.replace(
        metrics,
        axis_scores=dict(metrics.axis_scores),
        overall_score=int(clamp_score(blended)),
    )


# ============================================================
# PRESENTATION HELPERS
# ============================================================

def axis_label(score: int) -> str:
    if score < 35:
        return "Low"
    if score <= 65:
        return "Developing"
    return "Strong"


def coaching_recommendation(
    flags: Iterable[ActiveFlag], reference: ReferenceSpec,
) -> str:
    """
    Pick one coaching line for a set of active flags.

    The most confident critical flag wins (its reference description is
    returned); otherwise warnings are counted; otherwise all clear.
    """
    flags = list(flags)
    critical = [f for f in flags if f.severity == FlagSeverity.CRITICAL]
    if critical:
        top = max(critical, key=lambda f: f.confidence)
        definition = reference.flag(top.code)
        if definition is not None and definition.description:
            return definition.description
        return "Critical frame issue detected"

    warnings = [f for f in flags if f.severity == FlagSeverity.WARN]
    if warnings:
        return f"{len(warnings)} warning(s) detected - review frame patterns"

    return "Frame patterns within normal range"


def is_analysis_complete(metrics: IntakeMetrics) -> bool:
    """False for the all-zero result of a degraded or empty analysis."""
    return metrics.overall_score > 0 and metrics.axis_scores[Axis.FRAME_STRENGTH] > 0
