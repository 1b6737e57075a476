# ============================================================================
# LIFECYCLE GUARD
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Hard ceilings and permanent failure latch
# PURPOSE: Ask the orchestrator for a restart when hard limits are exceeded
# CREATED: 19 OCT 2026
# ============================================================================
"""
Lifecycle Guard

Hard limits, checked before and after every canary:

- permanently_failing latch set  -> TOO_MANY_REQUESTS
- transforms_executed > max_transform_count (when > 0) -> TOO_MANY_REQUESTS

After the transform, a duration above max_transform_ms (when > 0) sets the
permanently_failing latch. From then on every probe fails, live or ready,
canary or not, until the process is restarted.

State machine:
    Uninitialized -> WarmingUp -> SteadyState -> PermanentlyFailing (terminal)
"""

import logging
from typing import Optional

from core.contracts import ErrorKind
from core.logging import log_checkpoint
from probe.config import ProbeConfig
from probe.core import ProbeOutcome, ProbeTicket
from probe.state import ProbeState

logger = logging.getLogger(__name__)


class LifecycleGuard:
    """Enforces the transform count and duration ceilings."""

    def __init__(self, config: ProbeConfig, state: ProbeState):
        self.config = config
        self.state = state

    @property
    def permanently_failing(self) -> bool:
        return self.state.permanently_failing.is_set()

    def check(self, ticket: ProbeTicket) -> Optional[ProbeOutcome]:
        """
        Check the latch and the transform count ceiling.

        Returns:
            A TOO_MANY_REQUESTS outcome, or None if the limits hold
        """
        if self.state.permanently_failing.is_set():
            return self.latched_failure(ticket)

        limit = self.config.max_transform_count
        if limit > 0:
            executed = self.state.transforms_executed.value
            if executed > limit:
                return ProbeOutcome.failure(
                    ticket,
                    ErrorKind.TOO_MANY_REQUESTS,
                    f"Transformer requested to die. It has performed more than "
                    f"{limit} transformations",
                )
        return None

    def pre_check(self, ticket: ProbeTicket) -> Optional[ProbeOutcome]:
        """Limits checked before a canary starts."""
        return self.check(ticket)

    def post_check(self, ticket: ProbeTicket, elapsed_ms: int) -> Optional[ProbeOutcome]:
        """Record the canary duration, then re-check the limits."""
        self.record_duration(elapsed_ms, ticket)
        return self.check(ticket)

    def record_duration(self, elapsed_ms: int, ticket: Optional[ProbeTicket] = None) -> bool:
        """
        Latch permanent failure if a transform took too long.

        Returns:
            True if this call set the latch
        """
        limit_ms = self.config.max_transform_ms
        if limit_ms <= 0 or elapsed_ms <= limit_ms:
            return False

        if not self.state.permanently_failing.set():
            return False

        prefix = ticket.prefix if ticket else ""
        logger.error(
            f"{prefix}Transform took {elapsed_ms}ms, more than the "
            f"{self.config.max_transform_seconds} second limit. Requesting restart."
        )
        log_checkpoint("permanent_failure_latched", {
            "elapsed_ms": elapsed_ms,
            "max_transform_seconds": self.config.max_transform_seconds,
        })
        return True

    def latched_failure(self, ticket: ProbeTicket) -> ProbeOutcome:
        """Outcome reported for every probe once the latch is set."""
        return ProbeOutcome.failure(
            ticket,
            ErrorKind.TOO_MANY_REQUESTS,
            f"Transformer requested to die. A transform took longer than "
            f"{self.config.max_transform_seconds} seconds",
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LifecycleGuard",
]
