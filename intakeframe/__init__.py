"""
IntakeFrame — Frame Analysis Engine

Turns free-text intake answers into a structured frame profile:
axis scores, active flags, a frame type and an integrity tier.

Public API:
  - FrameAnalysisEngine:  Pipeline entry point (analyze, compute, merge)
  - load_reference_spec:  Load the reference bundle (never raises)
  - ReferenceSpec:        Immutable reference data; .unavailable() for degraded mode
  - Answer, IntakeSession, IntakeMetrics: Pipeline records
  - Axis, FlagCode, FrameType, Integrity: Closed enumerations

Usage:
    from intakeframe import FrameAnalysisEngine, load_reference_spec
    from intakeframe import Answer, IntakeSession

    engine = FrameAnalysisEngine(load_reference_spec())
    metrics = engine.compute_metrics(IntakeSession(answers=(...)))
"""

__version__ = "1.0.0"

from intakeframe.models import (
    Answer,
    AnswerAnalysis,
    AxisContribution,
    ActiveFlag,
    IntakeMetrics,
    IntakeSession,
    Axis,
    FlagCode,
    FlagSeverity,
    FrameType,
    Integrity,
)
from intakeframe.reference import ReferenceSpec, load_reference_spec
from intakeframe.engine import FrameAnalysisEngine
from intakeframe.scorer import (
    merge_external_score,
    axis_label,
    coaching_recommendation,
    is_analysis_complete,
)

__all__ = [
    "FrameAnalysisEngine",
    "ReferenceSpec",
    "load_reference_spec",
    "Answer",
    "AnswerAnalysis",
    "AxisContribution",
    "ActiveFlag",
    "IntakeMetrics",
    "IntakeSession",
    "Axis",
    "FlagCode",
    "FlagSeverity",
    "FrameType",
    "Integrity",
    "merge_external_score",
    "axis_label",
    "coaching_recommendation",
    "is_analysis_complete",
]
