# ============================================================================
# LOGGING TESTS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Tests - Context logging and formatters
# PURPOSE: Probe context reaches both formatters
# CREATED: 19 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

from core.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_checkpoint,
    log_context,
)


def _record(message="hello"):
    return logging.LogRecord("probe.test", logging.INFO, __file__, 1, message, None, None)


class TestLogContext:
    """Nested thread-local context."""

    def test_nesting_inherits_and_restores(self):
        with log_context(probe_kind="live", probe_count=3):
            with log_context(transform="copy"):
                inner = get_current_context()
                assert (inner.probe_kind, inner.probe_count, inner.transform) == ("live", 3, "copy")
            assert get_current_context().transform is None

        assert get_current_context().probe_kind is None

    def test_to_dict_drops_empty_fields(self):
        with log_context(probe_kind="ready", extra={"canary": True}):
            assert get_current_context().to_dict() == {"probe_kind": "ready", "canary": True}


class TestFormatters:
    """Context appears in formatted output."""

    def test_human_formatter_shows_probe(self):
        with log_context(probe_kind="live", probe_count=12, transform="copy"):
            line = HumanFormatter().format(_record())

        assert "[probe=live, n=12, transform=copy]" in line
        assert line.endswith("probe.test [probe=live, n=12, transform=copy]: hello")

    def test_structured_formatter_is_json(self):
        with log_context(probe_kind="ready", probe_count=2):
            data = json.loads(StructuredFormatter().format(_record("ready")))

        assert data["message"] == "ready"
        assert data["level"] == "INFO"
        assert data["context"] == {"probe_kind": "ready", "probe_count": 2}


class TestContextLogger:
    """Adapter attaches context and component to records."""

    def test_component_and_context_attached(self, caplog):
        logger = get_logger("probe.test.adapter", ComponentType.STORAGE)

        with caplog.at_level(logging.INFO):
            with log_context(probe_kind="live", probe_count=4):
                logger.info("copied")

        record = caplog.records[-1]
        assert record.extra["component"] == "storage"
        assert record.extra["probe_count"] == 4

    def test_context_component_wins(self, caplog):
        logger = get_logger("probe.test.adapter", ComponentType.STORAGE)

        with caplog.at_level(logging.INFO):
            with log_context(component="probe"):
                logger.info("copied")

        assert caplog.records[-1].extra["component"] == "probe"


class TestCheckpoint:
    """Named checkpoints carry probe context."""

    def test_checkpoint_record(self, caplog):
        with caplog.at_level(logging.INFO):
            with log_context(probe_kind="live", probe_count=9):
                log_checkpoint("baseline_learned", {"learned_normal_ms": 60})

        record = caplog.records[-1]
        assert record.getMessage() == "CHECKPOINT: baseline_learned"
        assert record.extra["checkpoint"] == "baseline_learned"
        assert record.extra["probe_count"] == 9
        assert record.extra["data"] == {"learned_normal_ms": 60}
