"""
Session Aggregation — Axis Scores and Active Flags

Folds every analyzed answer in a session into:
  - one 0-100 score per axis (primary axes from contributions, derived
    axes as fixed blends of the primary ones)
  - a deduplicated list of active flags with evidence and confidence

Aggregation always starts from the baseline and folds the whole answer
set, so recomputing after each new answer needs no bookkeeping.
"""

from __future__ import annotations

import logging
from typing import Iterable

from intakeframe.models import (
    BASELINE,
    SCORE_MIN,
    ActiveFlag,
    Answer,
    Axis,
    FlagCode,
    clamp_score,
    round_score,
)
from intakeframe.reference import ReferenceSpec

logger = logging.getLogger(__name__)

# A flag triggered this many times (or more) is fully confident
FULL_CONFIDENCE_TRIGGERS = 2


def has_contributions(answers: Iterable[Answer]) -> bool:
    """True if any analyzed answer contributed to at least one axis."""
    return any(
        a.analysis is not None and len(a.analysis.axis_contributions) > 0
        for a in answers
    )


def derive_axes(scores: dict[Axis, int]) -> dict[Axis, int]:
    """
    Compute the derived axes from already-aggregated primary axes.

    Returns a new map; primary axes are copied through unchanged.
    """
    derived = dict(scores)
    authority = scores[Axis.LINGUISTIC_AUTHORITY]
    locus = scores[Axis.LOCUS_OF_CONTROL]

    derived[Axis.STATUS_FRAME] = round_score(authority * 0.6 + locus * 0.4)
    derived[Axis.OPERATIONAL_CONGRUENCE] = scores[Axis.PROCESS_CLARITY]
    derived[Axis.BOUNDARY_CONTROL] = round_score(authority * 0.5 + locus * 0.5)
    derived[Axis.FRAME_STRENGTH] = round_score(
        locus * 0.25
        + authority * 0.30
        + derived[Axis.STATUS_FRAME] * 0.25
        + derived[Axis.BOUNDARY_CONTROL] * 0.20
    )

    return {axis: int(clamp_score(value)) for axis, value in derived.items()}


def compute_axis_scores(
    answers: Iterable[Answer], reference: ReferenceSpec,
) -> dict[Axis, int]:
    """
    Aggregate axis scores for a session.

    All axes start at 50 and each contribution is clamped as it is
    applied. If the reference is unavailable, or no answer contributed
    anything, every axis is 0: the "no analysis occurred" signal read by
    the integrity calculator.
    """
    answers = list(answers)
    if not reference.is_loaded or not has_contributions(answers):
        return {axis: SCORE_MIN for axis in Axis}

    scores: dict[Axis, int] = {axis: BASELINE for axis in Axis}
    for answer in answers:
        if answer.analysis is None:
            continue
        for contribution in answer.analysis.axis_contributions:
            scores[contribution.axis] = int(
                clamp_score(scores[contribution.axis] + contribution.delta)
            )

    return derive_axes(scores)


def aggregate_flags(
    answers: Iterable[Answer], reference: ReferenceSpec,
) -> list[ActiveFlag]:
    """
    Collect flags triggered across a session.

    Confidence is min(1.0, triggers / 2). Severity comes from the
    reference; codes it does not define are dropped.
    """
    triggered: dict[FlagCode, list[str]] = {}
    for answer in answers:
        if answer.analysis is None:
            continue
        for code in answer.analysis.flags_triggered:
            triggered.setdefault(code, []).append(answer.id)

    active: list[ActiveFlag] = []
    for code, evidence in triggered.items():
        definition = reference.flag(code)
        if definition is None:
            logger.debug(f"Dropping flag with no reference definition: {code.value}")
            continue
        active.append(ActiveFlag(
            code=code,
            severity=definition.severity,
            confidence=min(1.0, len(evidence) / FULL_CONFIDENCE_TRIGGERS),
            evidence=tuple(evidence),
        ))

    return active
