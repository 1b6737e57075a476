# ============================================================================
# PROBE MODULE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Self-tuning liveness and readiness checks
# PURPOSE: Canary transforms with a learned baseline and hard ceilings
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Module

Self-tuning health probes for a transform service running under Kubernetes:
- /live:  canary transforms during warm-up, then periodically
- /ready: a canary until the first one completes, then a cheap answer

Architecture:
- ProbeConfig: Thresholds from transform defaults + environment overrides
- ProbeState: Counters, learned baseline, one-way latches
- ProbeScheduler: Run-canary / no-op decision
- CanaryRunner: Timed transform and output validation
- AdaptiveTimingModel: Warm-up mean, threshold, canary schedule
- LifecycleGuard: Transform count / duration ceilings, permanent latch
- ProbeController: Wires the above; one outcome per probe

Usage:
    from probe import ProbeController, probe_router, set_probe_controller

    set_probe_controller(ProbeController.for_transform("copy"))
    app.include_router(probe_router)
"""

from probe.config import ProbeConfig
from probe.core import (
    AVERAGE_OVER_TRANSFORMS,
    CanaryResult,
    ProbeOutcome,
    ProbeTicket,
)
from probe.state import ProbeState, OneWayLatch, AtomicCounter
from probe.controller import ProbeController
from probe.router import probe_router, set_probe_controller, get_probe_controller

__all__ = [
    # Core types
    "AVERAGE_OVER_TRANSFORMS",
    "CanaryResult",
    "ProbeOutcome",
    "ProbeTicket",
    # Config and state
    "ProbeConfig",
    "ProbeState",
    "OneWayLatch",
    "AtomicCounter",
    # Controller
    "ProbeController",
    # Router
    "probe_router",
    "set_probe_controller",
    "get_probe_controller",
]
