"""
Tests for the frame type classifier.
"""

import itertools

import pytest

from intakeframe.classifier import FRAME_RULES, classify, matching_rule
from intakeframe.models import Axis, FrameType


def _scores(frame_strength: int, authority: int, **overrides) -> dict:
    scores = {axis: 50 for axis in Axis}
    scores[Axis.FRAME_STRENGTH] = frame_strength
    scores[Axis.LINGUISTIC_AUTHORITY] = authority
    for key, value in overrides.items():
        scores[Axis(key)] = value
    return scores


class TestDecisionList:
    """Rules are evaluated in order; first match wins."""

    def test_power(self):
        assert classify(_scores(70, 65)) == FrameType.POWER

    def test_power_at_thresholds(self):
        assert classify(_scores(65, 60)) == FrameType.POWER

    def test_power_needs_both_conditions(self):
        assert classify(_scores(64, 90)) == FrameType.ANALYST
        assert classify(_scores(90, 59)) == FrameType.ANALYST

    def test_supplicant_low_authority(self):
        assert classify(_scores(50, 35)) == FrameType.SUPPLICANT

    def test_supplicant_low_frame_strength(self):
        assert classify(_scores(39, 55)) == FrameType.SUPPLICANT

    def test_all_zero_is_supplicant(self):
        assert classify({axis: 0 for axis in Axis}) == FrameType.SUPPLICANT

    def test_analyst(self):
        assert classify(_scores(50, 55)) == FrameType.ANALYST

    def test_analyst_at_threshold(self):
        assert classify(_scores(40, 50)) == FrameType.ANALYST

    def test_mixed(self):
        assert classify(_scores(50, 45)) == FrameType.MIXED

    def test_other_axes_ignored(self):
        base = classify(_scores(50, 45))
        moved = classify(_scores(50, 45, locus_of_control=100, process_clarity=0))
        assert base == moved == FrameType.MIXED


class TestTotality:
    """Every score map gets exactly one label."""

    @pytest.mark.parametrize(
        "frame_strength,authority",
        list(itertools.product(range(0, 101, 5), range(0, 101, 5))),
    )
    def test_grid(self, frame_strength, authority):
        assert classify(_scores(frame_strength, authority)) in set(FrameType)

    def test_last_rule_is_catch_all(self):
        assert FRAME_RULES[-1].frame_type == FrameType.MIXED
        assert FRAME_RULES[-1].matches({}) is True

    def test_matching_rule_exposes_condition(self):
        rule = matching_rule(_scores(70, 65))
        assert rule.frame_type == FrameType.POWER
        assert "frame_strength" in rule.condition
