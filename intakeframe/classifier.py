"""
Frame Type Classifier

Assigns one of four labels from the aggregated axis scores using an
ordered decision list. The first rule that matches wins; the last rule
always matches, so every score map gets exactly one label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from intakeframe.models import Axis, FrameType


@dataclass(frozen=True)
class FrameRule:
    frame_type: FrameType
    condition: str
    matches: Callable[[dict[Axis, int]], bool]


FRAME_RULES: tuple[FrameRule, ...] = (
    FrameRule(
        frame_type=FrameType.POWER,
        condition="frame_strength >= 65 and linguistic_authority >= 60",
        matches=lambda s: (
            s[Axis.FRAME_STRENGTH] >= 65 and s[Axis.LINGUISTIC_AUTHORITY] >= 60
        ),
    ),
    FrameRule(
        frame_type=FrameType.SUPPLICANT,
        condition="frame_strength < 40 or linguistic_authority < 40",
        matches=lambda s: (
            s[Axis.FRAME_STRENGTH] < 40 or s[Axis.LINGUISTIC_AUTHORITY] < 40
        ),
    ),
    FrameRule(
        frame_type=FrameType.ANALYST,
        condition="linguistic_authority >= 50",
        matches=lambda s: s[Axis.LINGUISTIC_AUTHORITY] >= 50,
    ),
    FrameRule(
        frame_type=FrameType.MIXED,
        condition="fallback",
        matches=lambda s: True,
    ),
)


def matching_rule(axis_scores: dict[Axis, int]) -> FrameRule:
    """Return the first rule in FRAME_RULES that matches."""
    for rule in FRAME_RULES:
        if rule.matches(axis_scores):
            return rule
    raise AssertionError("FRAME_RULES must end with a catch-all rule")


def classify(axis_scores: dict[Axis, int]) -> FrameType:
    return matching_rule(axis_scores).frame_type
