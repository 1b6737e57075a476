# ============================================================================
# CANARY SCHEDULER
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Scheduling decision
# PURPOSE: Decide per probe whether to run a canary or answer immediately
# CREATED: 19 OCT 2026
# ============================================================================
"""
Canary Scheduler

Liveness probes are frequent, but a canary transform on every one of them
would load the service. A probe runs a canary when:

1. The controller has not completed a canary yet (live or ready), or
2. It is a live probe, live canaries are enabled (period > 0) and either
   warm-up is still running or the next scheduled canary is due.

Readiness probes after the first canary never run one. A probe that
runs a canary claims the scheduled slot in the same critical section as
the decision, so two probes arriving together never both take it. The
decision never touches files or the transform.
"""

import logging
from typing import Callable

from core.contracts import ProbeDecision, ProbeKind
from probe.config import ProbeConfig
from probe.core import AVERAGE_OVER_TRANSFORMS, ProbeTicket
from probe.state import ProbeState
from probe.timing import next_canary_slot

logger = logging.getLogger(__name__)


class ProbeScheduler:
    """Makes the run-canary / no-op decision for each probe."""

    def __init__(
        self,
        config: ProbeConfig,
        state: ProbeState,
        clock: Callable[[], int],
    ):
        """
        Args:
            config: Probe configuration
            state: Shared probe state
            clock: Returns the current time in milliseconds
        """
        self.config = config
        self.state = state
        self.clock = clock

    def decide(self, kind: ProbeKind) -> ProbeTicket:
        """
        Count the probe and decide whether it runs a canary.

        Args:
            kind: LIVE or READY

        Returns:
            ProbeTicket carrying the probe number and the decision
        """
        state = self.state
        now = self.clock()

        with state.lock:
            state.probe_count += 1
            probe_count = state.probe_count

            run = not state.initialized.is_set()
            if not run and kind.is_live and self.config.liveness_period_ms > 0:
                warming_up = state.canary_count < AVERAGE_OVER_TRANSFORMS
                run = warming_up or now >= state.next_canary_at_ms

            # Claim the slot so a concurrent probe sees the next one
            if run:
                state.next_canary_at_ms = next_canary_slot(
                    state.next_canary_at_ms, self.config.liveness_period_ms, now,
                )

        decision = ProbeDecision.RUN_CANARY if run else ProbeDecision.NO_OP
        logger.debug(f"Probe {probe_count} ({kind.value}): {decision.value}")
        return ProbeTicket(kind=kind, probe_count=probe_count, decision=decision)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeScheduler",
]
