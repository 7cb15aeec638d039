"""
Unit Tests for Structured Logging

Tests for the record format and algorithm/session context propagation.
"""
import logging

from algoflow.utils import StructuredFormatter, algorithm_logger


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="algoflow.test", level=logging.WARNING, pathname=__file__,
        lineno=1, msg=message, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:

    def test_plain_record(self):
        line = StructuredFormatter().format(_record("hello"))
        assert line.endswith("WARNING  [algoflow.test] hello")
        assert "{" not in line
        assert "\033[" not in line

    def test_context_segment(self):
        line = StructuredFormatter().format(
            _record("hello", algorithm_id="hypertension-mgmt", session_id="abc123")
        )
        assert "[algoflow.test] {hypertension-mgmt:abc123} hello" in line

    def test_colorized(self):
        line = StructuredFormatter(colorize=True).format(_record("hello"))
        assert line.startswith("\033[33m")
        assert line.endswith("\033[0m")


class TestAlgorithmLogger:

    def test_records_carry_context(self, caplog):
        log = algorithm_logger("algoflow.test", "triage", "s1")
        with caplog.at_level(logging.INFO, logger="algoflow.test"):
            log.info("started")
        record = caplog.records[-1]
        assert record.getMessage() == "started"
        assert (record.algorithm_id, record.session_id) == ("triage", "s1")

    def test_session_optional(self, caplog):
        log = algorithm_logger("algoflow.test", "triage")
        with caplog.at_level(logging.INFO, logger="algoflow.test"):
            log.info("started")
        assert not hasattr(caplog.records[-1], "session_id")

    def test_rejected_advance_is_tagged(self, controller, caplog):
        with caplog.at_level(logging.WARNING):
            controller.advance("ghost-edge")
        tagged = [r for r in caplog.records if "ghost-edge" in r.getMessage()]
        assert tagged and tagged[0].algorithm_id == "hypertension-mgmt"
