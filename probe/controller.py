# ============================================================================
# PROBE CONTROLLER
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Entry point for live and ready probes
# PURPOSE: Wire scheduler, canary runner, timing model and guard together
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Controller

One controller per process. Kubernetes calls the live and ready probes on
independent schedules, and either may arrive first or concurrently:

    probe(kind)
      -> ProbeScheduler.decide         (count, run canary or not)
      -> NO_OP:      "Success - No transform." (unless latched)
      -> RUN_CANARY: CanaryRunner.run  (guard, transform, timing, guard)

Every probe returns exactly one ProbeOutcome; nothing is retried and no
exception escapes to the caller.

Usage:
    controller = ProbeController.for_transform("copy")
    outcome = controller.live()
    print(outcome.status, outcome.message)
"""

import time
from typing import Any, Callable, Dict, Mapping, Optional

from core.contracts import ProbeDecision, ProbeKind
from core.logging import ComponentType, get_logger, log_context
from infrastructure.storage import TempFileProvider
from probe.canary import CanaryRunner
from probe.config import ProbeConfig
from probe.core import ProbeOutcome, ProbeTicket
from probe.guard import LifecycleGuard
from probe.scheduler import ProbeScheduler
from probe.state import ProbeState
from probe.timing import AdaptiveTimingModel
from transforms.registry import TransformFunc, get_transform_or_raise

logger = get_logger(__name__, ComponentType.PROBE)

NO_TRANSFORM_MESSAGE = "Success - No transform."


def monotonic_ms() -> int:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


class ProbeController:
    """
    Self-tuning liveness/readiness controller.

    Attributes:
        config: Immutable probe configuration
        state: Shared mutable state (one per controller)
        transform_name: Name used in log context
    """

    def __init__(
        self,
        config: ProbeConfig,
        transform: TransformFunc,
        storage: Optional[TempFileProvider] = None,
        clock: Optional[Callable[[], int]] = None,
        transform_name: str = "",
    ):
        """
        Initialize controller.

        Args:
            config: Probe configuration
            transform: Capability that performs one real transform
            storage: Scratch file provider (default TempFileProvider())
            clock: Millisecond clock (default monotonic_ms)
            transform_name: Name used in log context
        """
        self.config = config
        self.state = ProbeState()
        self.transform_name = transform_name or getattr(transform, "__name__", "transform")
        self.clock = clock or monotonic_ms
        self.storage = storage or TempFileProvider()

        self.scheduler = ProbeScheduler(config, self.state, self.clock)
        self.timing = AdaptiveTimingModel(config, self.state, self.clock)
        self.guard = LifecycleGuard(config, self.state)
        self.canary = CanaryRunner(
            config=config,
            state=self.state,
            transform=transform,
            storage=self.storage,
            clock=self.clock,
            timing=self.timing,
            guard=self.guard,
        )

    @classmethod
    def for_transform(
        cls,
        name: str,
        storage: Optional[TempFileProvider] = None,
        environ: Optional[Mapping[str, str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> "ProbeController":
        """
        Build a controller for a registered transform.

        The transform's probe defaults are combined with the environment
        overrides (livenessPercent, maxTransforms, ...).

        Raises:
            TransformNotFoundError: If no transform has that name
        """
        spec = get_transform_or_raise(name)
        config = ProbeConfig.from_env(spec.probe, environ)
        return cls(config, spec.func, storage=storage, clock=clock, transform_name=spec.name)

    # =========================================================================
    # PROBES
    # =========================================================================

    def probe(self, kind: ProbeKind) -> ProbeOutcome:
        """
        Handle one live or ready probe.

        Args:
            kind: LIVE or READY

        Returns:
            ProbeOutcome with status and prefixed message
        """
        ticket = self.scheduler.decide(kind)

        with log_context(
            probe_kind=kind.value,
            probe_count=ticket.probe_count,
            transform=self.transform_name,
            component=ComponentType.PROBE.value,
        ):
            if ticket.decision is ProbeDecision.NO_OP:
                return self._no_transform(ticket)
            return self.canary.run(ticket)

    def live(self) -> ProbeOutcome:
        return self.probe(ProbeKind.LIVE)

    def ready(self) -> ProbeOutcome:
        return self.probe(ProbeKind.READY)

    def _no_transform(self, ticket: ProbeTicket) -> ProbeOutcome:
        """Cheap answer between scheduled canaries."""
        if self.guard.permanently_failing:
            return self.guard.latched_failure(ticket)

        outcome = ProbeOutcome.success(ticket, NO_TRANSFORM_MESSAGE)
        if not ticket.is_live and self.state.ready_reported.set():
            logger.info(f"{ticket.label}{NO_TRANSFORM_MESSAGE}")
        return outcome

    # =========================================================================
    # COLLABORATORS
    # =========================================================================

    def increment_transform_count(self) -> int:
        """
        Count a real (non-canary) transform performed by the service.

        Returns:
            Total transforms executed since start
        """
        return self.state.transforms_executed.increment()

    @property
    def permanently_failing(self) -> bool:
        return self.guard.permanently_failing

    def snapshot(self) -> Dict[str, Any]:
        """State and configuration for diagnostics."""
        data = self.state.snapshot()
        data["transform"] = self.transform_name
        data["config"] = {
            "min_expected_size": self.config.min_expected_size,
            "max_expected_size": self.config.max_expected_size,
            "liveness_percent": self.config.liveness_percent,
            "liveness_period_ms": self.config.liveness_period_ms,
            "max_transform_count": self.config.max_transform_count,
            "max_transform_seconds": self.config.max_transform_seconds,
        }
        return data


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeController",
    "NO_TRANSFORM_MESSAGE",
    "monotonic_ms",
]
