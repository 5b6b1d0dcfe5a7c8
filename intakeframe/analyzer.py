"""
Answer Analyzer — Question Routing

Routes each answer to the detector for its question, and converts the
detector's sub-scores into axis contributions (signed deltas from the
neutral baseline of 50).

Questions that only collect identity or context (t1_identity,
t1_work_context, t1_self_rating, t1_closing), and any question id not in
the routing table, pass through with no contributions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from intakeframe.detectors import (
    detect_locus_authority,
    detect_motivation_direction,
    detect_process_clarity,
)
from intakeframe.models import (
    BASELINE,
    Answer,
    AnswerAnalysis,
    Axis,
    AxisContribution,
)
from intakeframe.reference import ReferenceSpec

logger = logging.getLogger(__name__)

# Answers at or above this many words are treated as fully confident
FULL_CONFIDENCE_WORDS = 50


@dataclass(frozen=True)
class Route:
    """Which detector reads a question, and which axes its sub-scores feed."""
    detector: Callable[[str], object]
    # (axis, detector result attribute, source label)
    feeds: tuple[tuple[Axis, str, str], ...]


_LOCUS_FAILURE = Route(
    detector=detect_locus_authority,
    feeds=(
        (Axis.LOCUS_OF_CONTROL, "locus", "locus_analysis"),
        (Axis.LINGUISTIC_AUTHORITY, "authority", "authority_analysis"),
    ),
)

_CONSTRAINT = Route(
    detector=detect_locus_authority,
    feeds=(
        (Axis.LOCUS_OF_CONTROL, "locus", "constraint_analysis"),
        # Authority in a constraint answer tracks self-awareness of the blocker
        (Axis.OPERATIONAL_CONGRUENCE, "authority", "constraint_analysis"),
    ),
)

_MOTIVATION_GOAL = Route(
    detector=detect_motivation_direction,
    feeds=((Axis.MOTIVATION_DIRECTION, "score", "motivation_analysis"),),
)

_WANT_DISCOVERY = Route(
    detector=detect_motivation_direction,
    feeds=((Axis.MOTIVATION_DIRECTION, "score", "want_analysis"),),
)

_PROCESS_SALES = Route(
    detector=detect_process_clarity,
    feeds=((Axis.PROCESS_CLARITY, "score", "process_analysis"),),
)

ROUTES: dict[str, Route] = {
    "t1_locus_failure": _LOCUS_FAILURE,
    "t1_constraint": _CONSTRAINT,
    "t1_motivation_goal": _MOTIVATION_GOAL,
    "t1_want_discovery_1": _WANT_DISCOVERY,
    "t1_want_discovery_2": _WANT_DISCOVERY,
    "t1_process_sales": _PROCESS_SALES,
}


def answer_confidence(text: str) -> float:
    """Confidence grows linearly with length, capped at 1.0."""
    return min(1.0, len(text.split()) / FULL_CONFIDENCE_WORDS)


def analyze_answer(answer: Answer, reference: ReferenceSpec) -> AnswerAnalysis:
    """
    Analyze one answer with its question-specific detector.

    Args:
        answer: The answer to analyze. Any attached analysis is ignored.
        reference: Loaded reference data. When unavailable, every answer
            gets an empty analysis with zero confidence.

    Returns:
        AnswerAnalysis with axis contributions, triggered flags and
        confidence.
    """
    if not reference.is_loaded:
        return AnswerAnalysis.empty()

    route = ROUTES.get(answer.question_id)
    confidence = answer_confidence(answer.raw_text)
    if route is None:
        return AnswerAnalysis(confidence=confidence)

    result = route.detector(answer.raw_text)
    contributions = tuple(
        AxisContribution(
            axis=axis,
            delta=getattr(result, attribute) - BASELINE,
            source=source,
        )
        for axis, attribute, source in route.feeds
    )

    logger.debug(
        f"Analyzed answer {answer.id}: {len(contributions)} contribution(s), "
        f"{len(result.flags)} flag(s)",
        extra={"question_id": answer.question_id, "flags_count": len(result.flags)},
    )

    return AnswerAnalysis(
        axis_contributions=contributions,
        flags_triggered=result.flags,
        confidence=confidence,
    )
