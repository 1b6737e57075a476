# ============================================================================
# ADAPTIVE TIMING TESTS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Tests - Baseline learning and canary scheduling
# PURPOSE: Running mean, threshold, catch-up rescheduling
# CREATED: 19 OCT 2026
# ============================================================================
"""
Adaptive Timing Tests

Run with:
    pytest tests/test_timing.py -v
"""

import logging
import threading

import pytest

from core.contracts import ProbeDecision, ProbeKind
from probe.config import ProbeConfig
from probe.core import ProbeTicket
from probe.state import ProbeState
from probe.timing import AdaptiveTimingModel, next_canary_slot


def _ticket(kind=ProbeKind.LIVE, n=1):
    return ProbeTicket(kind=kind, probe_count=n, decision=ProbeDecision.RUN_CANARY)


def _model(clock, period_seconds=0, liveness_percent=50):
    config = ProbeConfig.create(
        "quick.txt", "out.txt",
        expected_size=1000, tolerance=100,
        liveness_percent=liveness_percent,
        liveness_period_seconds=period_seconds,
    )
    return AdaptiveTimingModel(config, ProbeState(), clock)


# ============================================================================
# BASELINE
# ============================================================================

class TestObserve:
    """Running mean over the warm-up window."""

    def test_mean_excludes_first_sample(self, clock):
        model = _model(clock)

        for elapsed in [50, 60, 58, 62, 61]:
            assert model.observe(elapsed, _ticket())

        assert model.baseline() == (60, 90)

    def test_running_mean_after_each_sample(self, clock):
        model = _model(clock)
        model.observe(1000, _ticket())
        assert model.baseline() == (0, None)

        model.observe(40, _ticket())
        assert model.baseline() == (40, 60)

        model.observe(20, _ticket())
        assert model.baseline() == (30, 45)

    def test_integer_arithmetic_truncates(self, clock):
        model = _model(clock, liveness_percent=33)
        model.observe(0, _ticket())
        model.observe(10, _ticket())
        model.observe(11, _ticket())

        normal, threshold = model.baseline()
        assert normal == 10
        assert threshold == 13

    def test_frozen_after_window(self, clock):
        model = _model(clock)
        for elapsed in [50, 60, 58, 62, 61]:
            model.observe(elapsed, _ticket())

        assert model.observe(5000, _ticket()) is False
        assert model.baseline() == (60, 90)
        assert model.state.canary_count == 5

    def test_concurrent_observations_capped(self, clock):
        model = _model(clock)
        used = []
        lock = threading.Lock()

        def observe():
            result = model.observe(10, _ticket())
            with lock:
                used.append(result)

        threads = [threading.Thread(target=observe) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=20)

        assert used.count(True) == 5
        assert model.state.canary_count == 5
        assert model.baseline() == (10, 15)

    def test_baseline_learned_schedules_and_logs(self, clock, caplog):
        model = _model(clock, period_seconds=30)

        with caplog.at_level(logging.INFO):
            for n, elapsed in enumerate([50, 60, 58, 62, 61], start=1):
                model.observe(elapsed, _ticket(n=n))

        assert model.state.next_canary_at_ms == clock() + 30_000
        assert "5 Live Probe: Success - Transform 61ms - 60ms+50%=90ms" in caplog.text
        assert "CHECKPOINT: baseline_learned" in caplog.text

    def test_first_ready_success_logged_once(self, clock, caplog):
        model = _model(clock)

        with caplog.at_level(logging.INFO):
            model.observe(70, _ticket(ProbeKind.READY, n=1))
            model.observe(80, _ticket(ProbeKind.READY, n=2))

        assert "1 Ready Probe: Success - Transform 70ms" in caplog.text
        assert "2 Ready Probe" not in caplog.text

    def test_degraded_needs_two_samples(self, clock):
        model = _model(clock)
        model.observe(10, _ticket())

        assert not model.is_degraded(10_000)

        model.observe(40, _ticket())
        assert not model.is_degraded(60)
        assert model.is_degraded(61)


# ============================================================================
# NEXT SLOT
# ============================================================================

class TestNextCanarySlot:
    """Catch-up arithmetic for the next canary slot."""

    @pytest.mark.parametrize("now, expected", [
        (1050, 1100),
        (1100, 1100),
        (1300, 1300),
        (1350, 1400),
        (5_001, 5_100),
    ])
    def test_catch_up(self, now, expected):
        assert next_canary_slot(1000, 100, now) == expected

    def test_nothing_scheduled_stays_unscheduled(self):
        assert next_canary_slot(0, 100, 5000) == 0

    def test_no_period_leaves_slot(self):
        assert next_canary_slot(1000, 0, 5000) == 1000
