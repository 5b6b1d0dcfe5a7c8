"""
Reference Bundle Schemas

Pydantic models for the static reference bundle
(business_frame_spec.json). Field names follow the bundle's camelCase;
identifiers are kept as plain strings here and resolved to enums by
intakeframe.reference, which drops the ones it does not know.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


_BUNDLE_CONFIG = {"populate_by_name": True, "extra": "ignore"}


class AxisEntry(BaseModel):
    id: str
    name: str
    description: str = ""
    scale_min: int = Field(0, alias="scaleMin")
    scale_max: int = Field(100, alias="scaleMax")
    low_meaning: str = Field("", alias="lowMeaning")
    high_meaning: str = Field("", alias="highMeaning")
    mid_meaning: Optional[str] = Field(None, alias="midMeaning")

    model_config = _BUNDLE_CONFIG


class FlagEntry(BaseModel):
    code: str
    description: str
    severity: str = Field(..., pattern="^(info|warn|critical)$")
    trigger_detectors: list[str] = Field(default_factory=list, alias="triggerDetectors")
    affects_axes: list[str] = Field(default_factory=list, alias="affectsAxes")

    model_config = _BUNDLE_CONFIG


class DetectorEntry(BaseModel):
    id: str
    name: str
    description: str = ""
    pattern_hints: list[str] = Field(default_factory=list, alias="patternHints")

    model_config = _BUNDLE_CONFIG


class QuestionEntry(BaseModel):
    id: str
    tier: int = 1
    module: Optional[str] = None
    prompt: str
    question_type: Optional[str] = Field(None, alias="questionType")
    input_type: str = Field("text", alias="inputType")
    optional: bool = False
    min_value: Optional[int] = Field(None, alias="minValue")
    max_value: Optional[int] = Field(None, alias="maxValue")
    target_axes: list[str] = Field(default_factory=list, alias="targetAxes")
    target_flags: list[str] = Field(default_factory=list, alias="targetFlags")

    model_config = _BUNDLE_CONFIG


class ReferenceBundle(BaseModel):
    """Top-level shape of the reference bundle file."""
    version: str = "0"
    axes: list[AxisEntry] = Field(..., min_length=1)
    flags: list[FlagEntry] = Field(default_factory=list)
    detectors: list[DetectorEntry] = Field(default_factory=list)
    questions: list[QuestionEntry] = Field(default_factory=list)

    model_config = _BUNDLE_CONFIG
