"""
Tests for the run_analysis command-line entry point.
"""

import json
import logging
import sys

import pytest

import run_analysis


SESSION = {
    "session_id": "cli-1",
    "self_rating": "8",
    "answers": [
        {
            "id": "a1",
            "question_id": "t1_motivation_goal",
            "raw_text": "I want to build a product, grow revenue, launch a podcast "
                        "and hit 10k while I reduce churn.",
        },
    ],
}


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["run_analysis.py", *argv])
    with pytest.raises(SystemExit) as exc:
        run_analysis.main()
    return exc.value.code


@pytest.fixture
def session_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps(SESSION), encoding="utf-8")
    return str(path)


class TestRunAnalysis:

    def test_text_report(self, monkeypatch, capsys, session_file):
        assert _run(monkeypatch, session_file) == 0
        out = capsys.readouterr().out
        assert "FRAME ANALYSIS REPORT" in out
        assert "Frame type:      analyst" in out
        assert "Overall score:   56" in out
        assert "Integrity:       partial" in out
        assert "Self-rating:     8/10" in out

    def test_json_output(self, monkeypatch, capsys, session_file):
        assert _run(monkeypatch, session_file, "--json") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["overall_score"] == 56
        assert data["axis_scores"]["motivation_direction"] == 74
        assert data["coaching"] == "Frame patterns within normal range"

    def test_external_score(self, monkeypatch, capsys, session_file):
        assert _run(monkeypatch, session_file, "--json", "--external-score", "80") == 0
        assert json.loads(capsys.readouterr().out)["overall_score"] == 66

    def test_missing_spec_is_degraded(self, monkeypatch, capsys, session_file, tmp_path):
        code = _run(
            monkeypatch, session_file, "--json", "--spec", str(tmp_path / "nope.json"),
        )
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["integrity"] == "placeholder"
        assert data["overall_score"] == 0

    def test_verbose_logs_to_stderr(self, monkeypatch, capsys, session_file):
        package_logger = logging.getLogger("intakeframe")
        handlers, level = list(package_logger.handlers), package_logger.level
        try:
            assert _run(monkeypatch, session_file, "--json", "--verbose") == 0
            captured = capsys.readouterr()
        finally:
            package_logger.handlers[:] = handlers
            package_logger.setLevel(level)
        assert json.loads(captured.out)["overall_score"] == 56
        assert "Metrics computed" in captured.err
        assert "session_id=cli-1" in captured.err

    def test_missing_session_file(self, monkeypatch, capsys, tmp_path):
        assert _run(monkeypatch, str(tmp_path / "missing.json")) == 1
        assert "not found" in capsys.readouterr().out

    def test_malformed_session_file(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"answers": "nope"}', encoding="utf-8")
        assert _run(monkeypatch, str(path)) == 1
        assert "Could not read session" in capsys.readouterr().out
