"""
Frame Analysis Engine — Pipeline Orchestrator

Runs a session through every stage in one synchronous pass:

    analyze answers ─► axis scores ─┬─► frame type
                     └► active flags └─► overall score + integrity

The reference data is injected at construction. Pass
ReferenceSpec.unavailable() (or let load_reference_spec fail) to get
the degraded behaviour: empty analyses, all-zero axes, placeholder
integrity. The engine never raises for any input shape.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from intakeframe.aggregator import aggregate_flags, compute_axis_scores, has_contributions
from intakeframe.analyzer import analyze_answer
from intakeframe.classifier import classify
from intakeframe.config import settings
from intakeframe.models import Answer, AnswerAnalysis, IntakeMetrics, IntakeSession
from intakeframe.reference import ReferenceSpec
from intakeframe.scorer import (
    calculate_integrity,
    calculate_overall_score,
    merge_external_score,
)

logger = logging.getLogger(__name__)

SELF_RATING_QUESTION = "t1_self_rating"
SELF_RATING_MIN = 1
SELF_RATING_MAX = 10


# Leading integer of the raw value, as typed into the slider or text box
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_self_rating(raw: object) -> Optional[int]:
    """
    Return the rating as an integer in 1-10, or None.

    The leading integer is taken ("7.5" -> 7, "8/10" -> 8). Values with
    no leading digits, booleans, and anything outside 1-10 are absent.
    """
    if raw is None or isinstance(raw, bool):
        return None
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    value = int(match.group(1))
    if value < SELF_RATING_MIN or value > SELF_RATING_MAX:
        return None
    return value


class FrameAnalysisEngine:
    """
    Turns intake answers into IntakeMetrics.

    Stateless apart from the immutable reference it is built with;
    safe to share and to call repeatedly.
    """

    def __init__(self, reference: ReferenceSpec):
        self.reference = reference
        if not reference.is_loaded:
            logger.warning("Frame analysis engine created without reference data")

    @property
    def is_degraded(self) -> bool:
        return not self.reference.is_loaded

    def analyze_answer(self, answer: Answer) -> AnswerAnalysis:
        return analyze_answer(answer, self.reference)

    def analyze_session(self, session: IntakeSession) -> IntakeSession:
        """Return a copy of the session with every answer (re-)analyzed."""
        return IntakeSession(
            answers=tuple(a.with_analysis(self.analyze_answer(a)) for a in session.answers),
            self_rating=session.self_rating,
            id=session.id,
        )

    def self_rating(self, session: IntakeSession) -> Optional[int]:
        """
        The session's self-rating, if valid.

        The session field is used when set; otherwise the answer to the
        self-rating question is read.
        """
        if session.self_rating is not None:
            return parse_self_rating(session.self_rating)
        for answer in session.answers:
            if answer.question_id == SELF_RATING_QUESTION:
                return parse_self_rating(answer.raw_text)
        return None

    def compute_metrics(self, session: IntakeSession) -> IntakeMetrics:
        """
        Compute the full metrics for a session from its baseline.

        Every answer is analyzed afresh, so calling this after each new
        answer always reflects the whole answer set.
        """
        answers = self.analyze_session(session).answers

        axis_scores = compute_axis_scores(answers, self.reference)
        active_flags = aggregate_flags(answers, self.reference)
        frame_type = classify(axis_scores)
        integrity = calculate_integrity(axis_scores, answers, self.reference)
        overall = calculate_overall_score(axis_scores)

        metrics = IntakeMetrics(
            axis_scores=axis_scores,
            active_flags=tuple(active_flags),
            overall_score=overall,
            frame_type=frame_type,
            integrity=integrity,
            computed_at=datetime.now(timezone.utc).isoformat(),
            analysis_available=self.reference.is_loaded and has_contributions(answers),
            self_rating=self.self_rating(session),
            engine_version=settings.ENGINE_VERSION,
        )

        logger.info(
            f"Metrics computed: overall={overall} frame={frame_type.value} "
            f"integrity={integrity.value}",
            extra={
                "session_id": session.id,
                "overall_score": overall,
                "frame_type": frame_type.value,
                "integrity": integrity.value,
                "answers_count": len(answers),
                "flags_count": len(active_flags),
            },
        )
        return metrics

    def merge_external_score(
        self, metrics: IntakeMetrics, external_score: float,
    ) -> IntakeMetrics:
        return merge_external_score(metrics, external_score)
