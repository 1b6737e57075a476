# ============================================================================
# ADAPTIVE TIMING MODEL
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Learned baseline and rescheduling
# PURPOSE: Learn the normal canary duration and schedule live canaries
# CREATED: 19 OCT 2026
# ============================================================================
"""
Adaptive Timing Model

The first AVERAGE_OVER_TRANSFORMS canaries form the warm-up window. The
first of them is normally slow after a cold start, so it counts toward the
window but is left out of the mean:

    normal = (normal * (n - 2) + elapsed) // (n - 1)      for n >= 2
    threshold = normal * (100 + liveness_percent) // 100

After warm-up the baseline is frozen, so a service that slowly degrades is
still measured against how it performed when it started.

Live canaries are then spaced liveness_period_ms apart. When probes stop
arriving for a while the next slot is moved forward in whole periods, so a
backlog of missed canaries is never run.
"""

import logging
from typing import Callable, Optional, Tuple

from core.logging import log_checkpoint
from probe.config import ProbeConfig
from probe.core import AVERAGE_OVER_TRANSFORMS, ProbeTicket
from probe.state import ProbeState

logger = logging.getLogger(__name__)


def next_canary_slot(next_at_ms: int, period_ms: int, now_ms: int) -> int:
    """
    Next canary slot once the canary due at next_at_ms has been claimed.

    The slot moves forward by at least one period and then by whole
    periods until it is no longer in the past. Nothing moves while no slot
    has been scheduled (0) or live canaries are disabled (period 0).

    Args:
        next_at_ms: Slot being claimed
        period_ms: Gap between live canaries
        now_ms: Current clock time

    Returns:
        The new slot in milliseconds
    """
    if next_at_ms == 0 or period_ms <= 0:
        return next_at_ms

    next_at = next_at_ms + period_ms
    if next_at < now_ms:
        missed = (now_ms - next_at + period_ms - 1) // period_ms
        next_at += missed * period_ms
    return next_at


class AdaptiveTimingModel:
    """Maintains the learned normal duration and the canary schedule."""

    def __init__(
        self,
        config: ProbeConfig,
        state: ProbeState,
        clock: Callable[[], int],
    ):
        self.config = config
        self.state = state
        self.clock = clock

    # =========================================================================
    # BASELINE
    # =========================================================================

    def observe(self, elapsed_ms: int, ticket: ProbeTicket) -> bool:
        """
        Feed a canary duration into the warm-up window.

        Args:
            elapsed_ms: Duration of the transform call
            ticket: The probe that ran the canary

        Returns:
            True if the sample was used, False once the baseline is frozen
        """
        config = self.config
        state = self.state
        message: Optional[str] = None
        baseline_learned = False

        with state.lock:
            if state.canary_count >= AVERAGE_OVER_TRANSFORMS:
                return False

            state.canary_count += 1
            n = state.canary_count
            success = f"{ticket.prefix}Success - Transform {elapsed_ms}ms"

            if n > 1:
                state.learned_normal_ms = (
                    state.learned_normal_ms * (n - 2) + elapsed_ms
                ) // (n - 1)
                state.failure_threshold_ms = (
                    state.learned_normal_ms * (100 + config.liveness_percent)
                ) // 100

                first_ready = not ticket.is_live and state.ready_reported.set()
                baseline_learned = n >= AVERAGE_OVER_TRANSFORMS
                if first_ready or baseline_learned:
                    state.next_canary_at_ms = self.clock() + config.liveness_period_ms
                    message = (
                        f"{success} - {state.learned_normal_ms}ms+"
                        f"{config.liveness_percent}%={state.failure_threshold_ms}ms"
                    )
            elif not ticket.is_live and state.ready_reported.set():
                message = success

            normal_ms = state.learned_normal_ms
            threshold_ms = state.failure_threshold_ms
            next_at = state.next_canary_at_ms

        if message:
            logger.info(message)
        if baseline_learned:
            log_checkpoint("baseline_learned", {
                "learned_normal_ms": normal_ms,
                "failure_threshold_ms": threshold_ms,
                "next_canary_at_ms": next_at,
            })
        return True

    def is_degraded(self, elapsed_ms: int) -> bool:
        """True if a baseline exists and elapsed_ms is above its threshold."""
        with self.state.lock:
            threshold = self.state.failure_threshold_ms
            established = self.state.canary_count > 1
        return established and threshold is not None and elapsed_ms > threshold

    def baseline(self) -> Tuple[int, Optional[int]]:
        """(learned_normal_ms, failure_threshold_ms) as a consistent pair."""
        with self.state.lock:
            return self.state.learned_normal_ms, self.state.failure_threshold_ms


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "AdaptiveTimingModel",
    "next_canary_slot",
]
