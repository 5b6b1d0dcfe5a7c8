"""
API Schemas — Request and Response Models

Pydantic models for the IntakeFrame API, plus the conversions between
them and the engine's frozen records.
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, Field

from intakeframe.models import (
    ActiveFlag,
    Answer,
    AnswerAnalysis,
    Axis,
    FlagCode,
    FlagSeverity,
    FrameType,
    Integrity,
    IntakeMetrics,
    IntakeSession,
)


# ============================================================
# ANSWERS
# ============================================================

class AnswerRequest(BaseModel):
    """One questionnaire answer."""
    id: str = Field(..., min_length=1, max_length=200)
    question_id: str = Field(..., min_length=1, max_length=200)
    raw_text: str = Field("", max_length=20_000,
                          description="The answer as typed (slider values as text).")

    model_config = {"json_schema_extra": {"examples": [
        {"id": "a1", "question_id": "t1_motivation_goal",
         "raw_text": "Launch the new offer and grow revenue to 30k a month."},
    ]}}

    def to_answer(self) -> Answer:
        return Answer(id=self.id, question_id=self.question_id, raw_text=self.raw_text)


class AxisContributionResponse(BaseModel):
    axis: Axis
    delta: int
    source: str


class AnswerAnalysisResponse(BaseModel):
    """POST /answers/analyze response body."""
    answer_id: str
    question_id: str
    axis_contributions: list[AxisContributionResponse]
    flags_triggered: list[FlagCode]
    confidence: float

    @classmethod
    def from_analysis(cls, answer: Answer, analysis: AnswerAnalysis) -> "AnswerAnalysisResponse":
        return cls(
            answer_id=answer.id,
            question_id=answer.question_id,
            axis_contributions=[
                AxisContributionResponse(axis=c.axis, delta=c.delta, source=c.source)
                for c in analysis.axis_contributions
            ],
            flags_triggered=list(analysis.flags_triggered),
            confidence=analysis.confidence,
        )


# ============================================================
# METRICS
# ============================================================

class SessionRequest(BaseModel):
    """POST /metrics request body."""
    session_id: Optional[str] = None
    answers: list[AnswerRequest] = Field(default_factory=list, max_length=200)
    self_rating: Any = Field(
        None,
        description="Self-reported 1-10 rating, passed through as sent. "
                    "Anything that does not start with an integer in range is treated as absent.",
    )

    def to_session(self) -> IntakeSession:
        return IntakeSession(
            answers=tuple(a.to_answer() for a in self.answers),
            self_rating=self.self_rating,
            id=self.session_id,
        )


class ActiveFlagModel(BaseModel):
    code: FlagCode
    severity: FlagSeverity
    confidence: float = Field(..., ge=0.0, le=1.0)
    evidence: list[str]


class IntakeMetricsModel(BaseModel):
    """POST /metrics response body; also the input of /metrics/merge."""
    axis_scores: dict[Axis, int]
    active_flags: list[ActiveFlagModel]
    overall_score: int = Field(..., ge=0, le=100)
    frame_type: FrameType
    integrity: Integrity
    analysis_available: bool
    self_rating: Optional[int] = None
    computed_at: str
    engine_version: str = ""
    coaching: Optional[str] = None

    @classmethod
    def from_metrics(
        cls, metrics: IntakeMetrics, coaching: Optional[str] = None,
    ) -> "IntakeMetricsModel":
        return cls(
            axis_scores=dict(metrics.axis_scores),
            active_flags=[
                ActiveFlagModel(
                    code=f.code,
                    severity=f.severity,
                    confidence=f.confidence,
                    evidence=list(f.evidence),
                )
                for f in metrics.active_flags
            ],
            overall_score=metrics.overall_score,
            frame_type=metrics.frame_type,
            integrity=metrics.integrity,
            analysis_available=metrics.analysis_available,
            self_rating=metrics.self_rating,
            computed_at=metrics.computed_at,
            engine_version=metrics.engine_version,
            coaching=coaching,
        )

    def to_metrics(self) -> IntakeMetrics:
        scores = {axis: self.axis_scores.get(axis, 0) for axis in Axis}
        return IntakeMetrics(
            axis_scores=scores,
            active_flags=tuple(
                ActiveFlag(
                    code=f.code,
                    severity=f.severity,
                    confidence=f.confidence,
                    evidence=tuple(f.evidence),
                )
                for f in self.active_flags
            ),
            overall_score=self.overall_score,
            frame_type=self.frame_type,
            integrity=self.integrity,
            computed_at=self.computed_at,
            analysis_available=self.analysis_available,
            self_rating=self.self_rating,
            engine_version=self.engine_version,
        )


class MergeRequest(BaseModel):
    """POST /metrics/merge request body."""
    metrics: IntakeMetricsModel
    external_score: float = Field(..., ge=0, le=100,
                                  description="Score from an external modality (0-100).")


# ============================================================
# REFERENCE
# ============================================================

class AxisResponse(BaseModel):
    id: Axis
    name: str
    description: str
    scale_min: int
    scale_max: int
    low_meaning: str
    high_meaning: str
    mid_meaning: Optional[str] = None


class FlagResponse(BaseModel):
    code: FlagCode
    severity: FlagSeverity
    description: str
    trigger_detectors: list[str]
    affects_axes: list[Axis]


class QuestionResponse(BaseModel):
    id: str
    tier: int
    prompt: str
    question_type: Optional[str] = None
    input_type: str = "text"
    optional: bool = False
    analyzed: bool
    target_axes: list[Axis]
    target_flags: list[FlagCode]


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    engine_version: str
    spec_loaded: bool
    spec_version: str
    axes: int
    flags: int
    questions: int
