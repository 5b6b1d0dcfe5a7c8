"""
Domain Records — Axes, Flags, Answers, Metrics

Closed enumerations for every identifier the engine emits, and the
immutable records that flow through the pipeline:

    Answer ─► AnswerAnalysis ─► axis scores + ActiveFlags ─► IntakeMetrics

Records are frozen. Attaching an analysis to an answer produces a new
Answer; recomputing metrics produces a new IntakeMetrics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


SCORE_MIN = 0
SCORE_MAX = 100
BASELINE = 50


def clamp_score(value: float) -> float:
    """Clamp a score to the 0-100 axis range."""
    return max(SCORE_MIN, min(SCORE_MAX, value))


def round_score(value: float) -> int:
    """Round to the nearest integer, halves up (52.5 -> 53)."""
    return int(math.floor(value + 0.5))


# ============================================================
# ENUMERATIONS
# ============================================================

class Axis(str, Enum):
    """Profile dimensions, each scored 0-100."""
    LOCUS_OF_CONTROL = "locus_of_control"
    MOTIVATION_DIRECTION = "motivation_direction"
    PROCESS_CLARITY = "process_clarity"
    LINGUISTIC_AUTHORITY = "linguistic_authority"
    PRICING_CONFIDENCE = "pricing_confidence"
    STATUS_FRAME = "status_frame"
    BOUNDARY_CONTROL = "boundary_control"
    OPERATIONAL_CONGRUENCE = "operational_congruence"
    FRAME_STRENGTH = "frame_strength"


# Tier 1 axes fed directly by detectors; drive overall score and integrity
KEY_AXES: tuple[Axis, ...] = (
    Axis.LOCUS_OF_CONTROL,
    Axis.MOTIVATION_DIRECTION,
    Axis.PROCESS_CLARITY,
    Axis.LINGUISTIC_AUTHORITY,
)


class FlagCode(str, Enum):
    """Behavioural signals a detector may raise."""
    AGENCY_WARNING = "AGENCY_WARNING"
    LOCUS_EXTERNAL = "LOCUS_EXTERNAL"
    FRAME_STATUS_BETA = "FRAME_STATUS_BETA"
    PRICING_SHAME = "PRICING_SHAME"
    WEALTH_RESENTMENT = "WEALTH_RESENTMENT"
    JUSTIFICATION_LOOP = "JUSTIFICATION_LOOP"
    IMPOSTER_SYNDROME = "IMPOSTER_SYNDROME"
    SUPPLICANT_FRAME = "SUPPLICANT_FRAME"
    BOUNDARY_LEAK = "BOUNDARY_LEAK"
    GAP_DETECTED = "GAP_DETECTED"
    CALL_RELUCTANCE = "CALL_RELUCTANCE"
    CONFLICT_AVOIDANCE = "CONFLICT_AVOIDANCE"
    PASSIVE_AGGRESSION = "PASSIVE_AGGRESSION"
    DISTORTION_ALERT = "DISTORTION_ALERT"
    INTEGRITY_CHECK = "INTEGRITY_CHECK"
    STATIC_FRAME = "STATIC_FRAME"
    COMMITMENT_SOFT = "COMMITMENT_SOFT"


class FlagSeverity(str, Enum):
    INFO = "info"
    WARN = "warn"
    CRITICAL = "critical"


class FrameType(str, Enum):
    POWER = "power"
    SUPPLICANT = "supplicant"
    ANALYST = "analyst"
    MIXED = "mixed"


class Integrity(str, Enum):
    """How much real signal backs a computed result."""
    PLACEHOLDER = "placeholder"
    PARTIAL = "partial"
    LIVE = "live"


# ============================================================
# PIPELINE RECORDS
# ============================================================

@dataclass(frozen=True)
class AxisContribution:
    """A signed delta applied to one axis by one detector."""
    axis: Axis
    delta: int
    source: str          # e.g., "locus_analysis"


@dataclass(frozen=True)
class AnswerAnalysis:
    """Result of running the routed detector over one answer."""
    axis_contributions: tuple[AxisContribution, ...] = ()
    flags_triggered: tuple[FlagCode, ...] = ()
    confidence: float = 0.0

    @classmethod
    def empty(cls) -> "AnswerAnalysis":
        return cls()


@dataclass(frozen=True)
class Answer:
    """One free-text response tied to a question identity."""
    id: str
    question_id: str
    raw_text: str
    analysis: Optional[AnswerAnalysis] = None

    def with_analysis(self, analysis: AnswerAnalysis) -> "Answer":
        """Return a copy with `analysis` attached, replacing any previous one."""
        return replace(self, analysis=analysis)


@dataclass(frozen=True)
class IntakeSession:
    """Ordered answers plus an optional self-reported rating (raw value)."""
    answers: tuple[Answer, ...] = ()
    self_rating: Optional[object] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class ActiveFlag:
    """A flag triggered by at least one answer in the session."""
    code: FlagCode
    severity: FlagSeverity
    confidence: float       # 0.0 to 1.0
    evidence: tuple[str, ...]  # Answer ids that triggered it


@dataclass(frozen=True)
class IntakeMetrics:
    """Final engine output for a session. Derived, never hand-edited."""
    axis_scores: dict[Axis, int]
    active_flags: tuple[ActiveFlag, ...]
    overall_score: int
    frame_type: FrameType
    integrity: Integrity
    computed_at: str                 # ISO timestamp (UTC)
    analysis_available: bool = False
    self_rating: Optional[int] = None
    engine_version: str = ""
