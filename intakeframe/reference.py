"""
Reference Spec — Axes, Flags, Detectors, Questions

The read-only reference data the engine is built against. It is loaded
once from the JSON bundle and handed to FrameAnalysisEngine explicitly;
nothing here is a module-level singleton.

A bundle that is missing or malformed never raises to callers. The
loader logs the failure and returns ReferenceSpec.unavailable(), which
every pipeline stage checks through `is_loaded` and answers with its
defined degraded output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from intakeframe.models import Axis, FlagCode, FlagSeverity
from intakeframe.schemas.reference import ReferenceBundle

logger = logging.getLogger(__name__)


# ============================================================
# DEFINITIONS
# ============================================================

@dataclass(frozen=True)
class AxisDefinition:
    id: Axis
    name: str
    description: str
    scale_min: int
    scale_max: int
    low_meaning: str
    high_meaning: str
    mid_meaning: Optional[str] = None


@dataclass(frozen=True)
class FlagDefinition:
    code: FlagCode
    severity: FlagSeverity
    description: str
    trigger_detectors: tuple[str, ...] = ()
    affects_axes: tuple[Axis, ...] = ()


@dataclass(frozen=True)
class DetectorDefinition:
    id: str
    name: str
    description: str
    pattern_hints: tuple[str, ...] = ()


@dataclass(frozen=True)
class QuestionDefinition:
    id: str
    tier: int
    prompt: str
    question_type: Optional[str] = None
    module: Optional[str] = None
    input_type: str = "text"
    optional: bool = False
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    target_axes: tuple[Axis, ...] = ()
    target_flags: tuple[FlagCode, ...] = ()


@dataclass(frozen=True)
class ReferenceSpec:
    """Immutable reference data. `loaded=False` marks a failed load."""
    axes: tuple[AxisDefinition, ...] = ()
    flags: tuple[FlagDefinition, ...] = ()
    detectors: tuple[DetectorDefinition, ...] = ()
    questions: tuple[QuestionDefinition, ...] = ()
    version: str = "0"
    loaded: bool = False

    @classmethod
    def unavailable(cls) -> "ReferenceSpec":
        """The stand-in used when the bundle could not be loaded."""
        return cls()

    @property
    def is_loaded(self) -> bool:
        return self.loaded and len(self.axes) > 0

    def axis(self, axis_id: Axis) -> Optional[AxisDefinition]:
        return next((a for a in self.axes if a.id == axis_id), None)

    def flag(self, code: FlagCode) -> Optional[FlagDefinition]:
        return next((f for f in self.flags if f.code == code), None)

    def detector(self, detector_id: str) -> Optional[DetectorDefinition]:
        return next((d for d in self.detectors if d.id == detector_id), None)

    def question(self, question_id: str) -> Optional[QuestionDefinition]:
        return next((q for q in self.questions if q.id == question_id), None)


# ============================================================
# LOADING
# ============================================================

def _known(enum_cls, values, kind: str) -> tuple:
    """Resolve string ids to enum members, skipping unknown ones."""
    resolved = []
    for value in values:
        try:
            resolved.append(enum_cls(value))
        except ValueError:
            logger.warning(f"Ignoring unknown {kind} in reference bundle: {value!r}")
    return tuple(resolved)


def build_reference_spec(bundle: ReferenceBundle) -> ReferenceSpec:
    """Convert a validated bundle into a ReferenceSpec."""
    axes = []
    for entry in bundle.axes:
        resolved = _known(Axis, [entry.id], "axis")
        if not resolved:
            continue
        axes.append(AxisDefinition(
            id=resolved[0],
            name=entry.name,
            description=entry.description,
            scale_min=entry.scale_min,
            scale_max=entry.scale_max,
            low_meaning=entry.low_meaning,
            high_meaning=entry.high_meaning,
            mid_meaning=entry.mid_meaning,
        ))

    flags = []
    for entry in bundle.flags:
        resolved = _known(FlagCode, [entry.code], "flag")
        if not resolved:
            continue
        flags.append(FlagDefinition(
            code=resolved[0],
            severity=FlagSeverity(entry.severity),
            description=entry.description,
            trigger_detectors=tuple(entry.trigger_detectors),
            affects_axes=_known(Axis, entry.affects_axes, "axis"),
        ))

    detectors = tuple(
        DetectorDefinition(
            id=d.id,
            name=d.name,
            description=d.description,
            pattern_hints=tuple(d.pattern_hints),
        )
        for d in bundle.detectors
    )

    questions = tuple(
        QuestionDefinition(
            id=q.id,
            tier=q.tier,
            prompt=q.prompt,
            question_type=q.question_type,
            module=q.module,
            input_type=q.input_type,
            optional=q.optional,
            min_value=q.min_value,
            max_value=q.max_value,
            target_axes=_known(Axis, q.target_axes, "axis"),
            target_flags=_known(FlagCode, q.target_flags, "flag"),
        )
        for q in bundle.questions
    )

    return ReferenceSpec(
        axes=tuple(axes),
        flags=tuple(flags),
        detectors=detectors,
        questions=questions,
        version=bundle.version,
        loaded=True,
    )


def load_reference_spec(path: Union[str, Path, None] = None) -> ReferenceSpec:
    """
    Load the reference bundle from disk.

    Args:
        path: Bundle location. Defaults to settings.SPEC_PATH.

    Returns:
        A loaded ReferenceSpec, or ReferenceSpec.unavailable() if the
        file is missing, is not JSON, or does not match the bundle schema.
    """
    if path is None:
        from intakeframe.config import settings
        path = settings.SPEC_PATH
    path = Path(path)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        bundle = ReferenceBundle.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(
            "Reference bundle failed to load — engine running in degraded mode",
            extra={"spec_path": str(path), "error": str(e), "error_type": type(e).__name__},
        )
        return ReferenceSpec.unavailable()

    spec = build_reference_spec(bundle)
    logger.info(
        f"Reference bundle loaded: {len(spec.axes)} axes, {len(spec.flags)} flags, "
        f"{len(spec.questions)} questions",
        extra={"spec_path": str(path)},
    )
    return spec
