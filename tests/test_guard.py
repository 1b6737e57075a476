# ============================================================================
# LIFECYCLE GUARD TESTS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Tests - Hard ceilings and the permanent failure latch
# PURPOSE: Transform count and duration limits
# CREATED: 19 OCT 2026
# ============================================================================
"""
Lifecycle Guard Tests

Run with:
    pytest tests/test_guard.py -v
"""

import pytest

from core.contracts import ErrorKind, ProbeDecision, ProbeKind, ProbeStatus
from probe.core import ProbeTicket
from probe.guard import LifecycleGuard
from probe.state import ProbeState

TICKET = ProbeTicket(kind=ProbeKind.LIVE, probe_count=7, decision=ProbeDecision.RUN_CANARY)


@pytest.fixture
def make_guard(make_config):
    def _make(**config_kwargs):
        return LifecycleGuard(make_config(**config_kwargs), ProbeState())
    return _make


class TestTransformCount:
    """maxTransforms ceiling."""

    def test_within_limit(self, make_guard):
        guard = make_guard(max_transforms=3)
        guard.state.transforms_executed.increment(3)

        assert guard.check(TICKET) is None

    def test_over_limit(self, make_guard):
        guard = make_guard(max_transforms=3)
        guard.state.transforms_executed.increment(4)

        outcome = guard.check(TICKET)

        assert outcome.status is ProbeStatus.SERVICE_UNAVAILABLE
        assert outcome.error_kind is ErrorKind.TOO_MANY_REQUESTS
        assert outcome.message == (
            "7 Live Probe: Transformer requested to die. "
            "It has performed more than 3 transformations"
        )

    def test_zero_is_unlimited(self, make_guard):
        guard = make_guard(max_transforms=0)
        guard.state.transforms_executed.increment(1_000_000)

        assert guard.pre_check(TICKET) is None


class TestDuration:
    """maxTransformSeconds ceiling and the latch."""

    def test_over_limit_latches(self, make_guard):
        guard = make_guard(max_transform_seconds=2)

        assert guard.record_duration(2001, TICKET) is True
        assert guard.permanently_failing

    def test_at_limit_does_not_latch(self, make_guard):
        guard = make_guard(max_transform_seconds=2)

        assert guard.record_duration(2000, TICKET) is False
        assert not guard.permanently_failing

    def test_zero_is_unlimited(self, make_guard):
        guard = make_guard(max_transform_seconds=0)

        assert guard.record_duration(10 ** 9) is False

    def test_latch_reported_once(self, make_guard):
        guard = make_guard(max_transform_seconds=1)

        assert guard.record_duration(5000, TICKET) is True
        assert guard.record_duration(5000, TICKET) is False
        assert guard.permanently_failing

    def test_post_check_reports_latch(self, make_guard):
        guard = make_guard(max_transform_seconds=1)

        outcome = guard.post_check(TICKET, 1001)

        assert outcome.status is ProbeStatus.SERVICE_UNAVAILABLE
        assert outcome.message == (
            "7 Live Probe: Transformer requested to die. "
            "A transform took longer than 1 seconds"
        )

    def test_latch_takes_precedence_over_count(self, make_guard):
        guard = make_guard(max_transforms=1, max_transform_seconds=1)
        guard.state.transforms_executed.increment(5)
        guard.record_duration(9999)

        assert "took longer than" in guard.pre_check(TICKET).message
