#!/usr/bin/env python3
"""
run_analysis.py — Score an intake session stored as JSON.

Usage:
    python run_analysis.py session.json                    # Text report
    python run_analysis.py session.json --json             # JSON only (for automation)
    python run_analysis.py session.json --external-score 72
    python run_analysis.py session.json --spec path/to/business_frame_spec.json
    python run_analysis.py session.json --verbose          # Pipeline logs on stderr

Session file shape:
    {"session_id": "...", "self_rating": 7,
     "answers": [{"id": "a1", "question_id": "t1_locus_failure", "raw_text": "..."}]}
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from pydantic import ValidationError

from intakeframe.config import settings
from intakeframe.engine import FrameAnalysisEngine
from intakeframe.logging import setup_logging
from intakeframe.models import IntakeMetrics
from intakeframe.reference import ReferenceSpec, load_reference_spec
from intakeframe.schemas.metrics import IntakeMetricsModel, SessionRequest
from intakeframe.scorer import axis_label, coaching_recommendation


def format_report(metrics: IntakeMetrics, reference: ReferenceSpec) -> str:
    """Render metrics as a plain-text report."""
    lines = [
        "=" * 60,
        "INTAKEFRAME — FRAME ANALYSIS REPORT",
        "=" * 60,
        f"Frame type:      {metrics.frame_type.value}",
        f"Overall score:   {metrics.overall_score}",
        f"Integrity:       {metrics.integrity.value}",
    ]
    if metrics.self_rating is not None:
        lines.append(f"Self-rating:     {metrics.self_rating}/10")
    if not metrics.analysis_available:
        lines.append("")
        lines.append("No analyzable answers — scores below are placeholders.")

    lines.append("")
    lines.append("AXES")
    lines.append("-" * 60)
    for axis, score in metrics.axis_scores.items():
        definition = reference.axis(axis)
        name = definition.name if definition else axis.value
        lines.append(f"  {name:<26} {score:>3}  {axis_label(score)}")

    lines.append("")
    lines.append("FLAGS")
    lines.append("-" * 60)
    if not metrics.active_flags:
        lines.append("  (none)")
    for flag in metrics.active_flags:
        lines.append(
            f"  {flag.code.value:<20} {flag.severity.value:<8} "
            f"conf={flag.confidence:.2f}  answers={', '.join(flag.evidence)}"
        )

    lines.append("")
    lines.append(f"Coaching: {coaching_recommendation(metrics.active_flags, reference)}")
    lines.append(f"Computed at {metrics.computed_at} (engine {metrics.engine_version})")
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="IntakeFrame Session Analyzer")
    parser.add_argument("session", help="Path to a session JSON file")
    parser.add_argument(
        "--spec",
        default=settings.SPEC_PATH,
        help="Path to the reference bundle (default: packaged bundle)",
    )
    parser.add_argument(
        "--external-score",
        type=float,
        default=None,
        help="Blend an external 0-100 score into the overall score",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON only (for automation)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr",
    )
    args = parser.parse_args()

    if args.verbose:
        setup_logging(level="DEBUG", fmt="text")

    # Step 1: Read the session
    session_path = Path(args.session)
    if not session_path.exists():
        print(f"Error: Session file not found: {session_path}")
        sys.exit(1)

    try:
        request = SessionRequest.model_validate_json(session_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        print(f"Error: Could not read session from {session_path}: {e}")
        sys.exit(1)

    # Step 2: Score it
    engine = FrameAnalysisEngine(load_reference_spec(args.spec))
    metrics = engine.compute_metrics(request.to_session())
    if args.external_score is not None:
        metrics = engine.merge_external_score(metrics, args.external_score)

    # Step 3: Output
    if args.json:
        coaching = coaching_recommendation(metrics.active_flags, engine.reference)
        model = IntakeMetricsModel.from_metrics(metrics, coaching=coaching)
        print(json.dumps(model.model_dump(mode="json"), indent=2))
    else:
        print(format_report(metrics, engine.reference))

    sys.exit(0)


if __name__ == "__main__":
    main()
