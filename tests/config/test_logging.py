"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from subjectid.config.logging import configure_logging
from subjectid.domain.subject import decode_subject_id
from subjectid.errors import NoMatchingShapeError
from subjectid.services.subject import SubjectIdService


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    sid = logging.getLogger("subjectid")
    sid_level = sid.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    sid.setLevel(sid_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("subjectid").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("subjectid").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("subjectid.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "subjectid.test"
        assert "timestamp" in parsed

    def test_json_mode_flattens_exceptions(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("subjectid.test")
        try:
            decode_subject_id({"format": "ssn"})
        except NoMatchingShapeError:
            log.exception("decode failed")
        lines = [line for line in capfd.readouterr().err.splitlines() if line.strip()]
        parsed = json.loads(lines[-1])
        assert parsed["event"] == "decode failed"
        assert "NoMatchingShapeError" in parsed["exception"]

    def test_service_rejection_is_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        SubjectIdService().validate({"format": "ssn", "value": "1"})
        captured = capfd.readouterr()
        events = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
        rejected = [e for e in events if e["event"] == "subject_id_rejected"]
        assert rejected
        assert rejected[0]["code"] == "NO_MATCHING_SHAPE"

    def test_decode_failure_debug_from_stdlib_logger(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        with pytest.raises(NoMatchingShapeError):
            decode_subject_id({"format": "ssn"})
        captured = capfd.readouterr()
        events = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
        assert any(e["logger"] == "subjectid.domain.subject" for e in events)
        assert all(e["level"] == "debug" for e in events)

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        SubjectIdService().validate({"format": "ssn", "value": "1"})
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
