"""
Tests for the answer analyzer — question routing, contributions, confidence.
"""

import pytest

from intakeframe.analyzer import ROUTES, analyze_answer, answer_confidence
from intakeframe.models import Answer, Axis, FlagCode
from intakeframe.reference import ReferenceSpec, load_reference_spec


REFERENCE = load_reference_spec()

FAILURE_TEXT = (
    "I missed the deadline because my plan was rushed and I underestimated the scope."
)
GOAL_TEXT = (
    "I want to build a product, grow revenue, launch a podcast "
    "and hit 10k while I reduce churn."
)
PROCESS_TEXT = (
    "First we qualify the lead, then we demo, next we send a proposal "
    "and finally we close."
)


def _answer(question_id: str, text: str, answer_id: str = "a1") -> Answer:
    return Answer(id=answer_id, question_id=question_id, raw_text=text)


class TestRouting:
    """Each question id reaches the right detector and axes."""

    def test_failure_narrative_feeds_locus_and_authority(self):
        analysis = analyze_answer(_answer("t1_locus_failure", FAILURE_TEXT), REFERENCE)
        contributions = {c.axis: c for c in analysis.axis_contributions}
        assert set(contributions) == {Axis.LOCUS_OF_CONTROL, Axis.LINGUISTIC_AUTHORITY}
        assert contributions[Axis.LOCUS_OF_CONTROL].delta == 7
        assert contributions[Axis.LOCUS_OF_CONTROL].source == "locus_analysis"
        assert contributions[Axis.LINGUISTIC_AUTHORITY].delta == -4
        assert contributions[Axis.LINGUISTIC_AUTHORITY].source == "authority_analysis"

    def test_constraint_feeds_locus_and_operational_congruence(self):
        analysis = analyze_answer(_answer("t1_constraint", FAILURE_TEXT), REFERENCE)
        axes = [c.axis for c in analysis.axis_contributions]
        assert axes == [Axis.LOCUS_OF_CONTROL, Axis.OPERATIONAL_CONGRUENCE]
        assert all(c.source == "constraint_analysis" for c in analysis.axis_contributions)

    def test_motivation_goal(self):
        analysis = analyze_answer(_answer("t1_motivation_goal", GOAL_TEXT), REFERENCE)
        (contribution,) = analysis.axis_contributions
        assert contribution.axis == Axis.MOTIVATION_DIRECTION
        assert contribution.delta == 24
        assert contribution.source == "motivation_analysis"
        assert analysis.flags_triggered == ()

    @pytest.mark.parametrize("question_id", ["t1_want_discovery_1", "t1_want_discovery_2"])
    def test_want_discovery(self, question_id):
        analysis = analyze_answer(_answer(question_id, GOAL_TEXT), REFERENCE)
        (contribution,) = analysis.axis_contributions
        assert contribution.axis == Axis.MOTIVATION_DIRECTION
        assert contribution.source == "want_analysis"

    def test_process_sales(self):
        analysis = analyze_answer(_answer("t1_process_sales", PROCESS_TEXT), REFERENCE)
        (contribution,) = analysis.axis_contributions
        assert contribution.axis == Axis.PROCESS_CLARITY
        assert contribution.delta == 50
        assert contribution.source == "process_analysis"

    def test_flags_carried_from_detector(self):
        analysis = analyze_answer(
            _answer("t1_locus_failure", "The proposal was rejected and the budget was frozen."),
            REFERENCE,
        )
        assert FlagCode.AGENCY_WARNING in analysis.flags_triggered

    @pytest.mark.parametrize(
        "question_id",
        ["t1_identity", "t1_work_context", "t1_closing", "t1_self_rating", "not_a_question"],
    )
    def test_pass_through_questions(self, question_id):
        analysis = analyze_answer(_answer(question_id, FAILURE_TEXT), REFERENCE)
        assert analysis.axis_contributions == ()
        assert analysis.flags_triggered == ()
        assert analysis.confidence > 0

    def test_routing_table_covers_analyzed_questions(self):
        assert set(ROUTES) == {
            "t1_locus_failure",
            "t1_constraint",
            "t1_motivation_goal",
            "t1_want_discovery_1",
            "t1_want_discovery_2",
            "t1_process_sales",
        }


class TestConfidence:
    """Confidence = min(1.0, words / 50)."""

    def test_empty_text(self):
        assert answer_confidence("") == 0.0

    def test_short_text_scales_linearly(self):
        assert answer_confidence(" ".join(["word"] * 25)) == pytest.approx(0.5)

    def test_long_text_caps_at_one(self):
        assert answer_confidence(" ".join(["word"] * 80)) == 1.0

    def test_analysis_reports_confidence(self):
        analysis = analyze_answer(_answer("t1_locus_failure", FAILURE_TEXT), REFERENCE)
        assert analysis.confidence == pytest.approx(14 / 50)


class TestDegradedMode:
    """Without reference data every answer gets an empty analysis."""

    def test_unavailable_reference_returns_empty(self):
        analysis = analyze_answer(
            _answer("t1_locus_failure", FAILURE_TEXT), ReferenceSpec.unavailable(),
        )
        assert analysis.axis_contributions == ()
        assert analysis.flags_triggered == ()
        assert analysis.confidence == 0.0

    def test_loaded_flag_without_axes_is_unavailable(self):
        reference = ReferenceSpec(loaded=True)
        assert reference.is_loaded is False
        analysis = analyze_answer(_answer("t1_process_sales", PROCESS_TEXT), reference)
        assert analysis.confidence == 0.0
