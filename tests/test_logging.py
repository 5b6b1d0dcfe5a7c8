"""Structured logging tests."""

import json
import logging

import pytest

from intakeframe.logging import (
    JSONFormatter,
    TextFormatter,
    get_logger,
    record_context,
    setup_logging,
)


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger("intakeframe")
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="intakeframe.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_formatter(self):
        parsed = json.loads(JSONFormatter().format(_record("Test message")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "intakeframe.test"
        assert "timestamp" in parsed

    def test_json_formatter_extra_fields(self):
        record = _record("Metrics computed", overall_score=69, frame_type="mixed", unrelated="x")
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["overall_score"] == 69
        assert parsed["frame_type"] == "mixed"
        assert "unrelated" not in parsed

    def test_text_formatter_appends_context(self):
        record = _record("Metrics computed", session_id="s-1", integrity="live")
        line = TextFormatter().format(record)
        assert line.endswith("Metrics computed | session_id=s-1 integrity=live")

    def test_text_formatter_without_context(self):
        line = TextFormatter().format(_record("Starting"))
        assert line.endswith("intakeframe.test: Starting")

    def test_record_context_skips_none(self):
        record = _record("x", session_id=None, answers_count=3)
        assert record_context(record) == {"answers_count": 3}


class TestSetup:

    def test_get_logger(self):
        log = get_logger("engine")
        assert log.name == "intakeframe.engine"

    def test_setup_logging_single_handler(self, restore_package_logger):
        setup_logging()
        package_logger = setup_logging()
        assert package_logger.name == "intakeframe"
        assert len(package_logger.handlers) == 1

    def test_overrides(self, restore_package_logger):
        package_logger = setup_logging(level="debug", fmt="text")
        assert package_logger.level == logging.DEBUG
        assert isinstance(package_logger.handlers[0].formatter, TextFormatter)
