# ============================================================================
# PROBE STATE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Shared mutable statistics
# PURPOSE: Counters, learned baseline and one-way latches for one controller
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe State

All mutable state of one ProbeController. Probe requests arrive on several
threads at once, so:

- probe_count, canary_count, learned_normal_ms, failure_threshold_ms and
  next_canary_at_ms are only touched while holding ProbeState.lock
- transforms_executed is an AtomicCounter (collaborators increment it too)
- initialized, ready_reported and permanently_failing are OneWayLatch
  instances: they can be set, never cleared

Nothing here is persisted; a process restart is the only reset.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class OneWayLatch:
    """
    Boolean that can only go from False to True.

    Once set it stays set for the life of the process.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._set = False

    def set(self) -> bool:
        """
        Set the latch.

        Returns:
            True if this call set it, False if it was already set
        """
        with self._lock:
            if self._set:
                return False
            self._set = True
            return True

    def is_set(self) -> bool:
        return self._set

    def __bool__(self) -> bool:
        return self._set

    def __repr__(self) -> str:
        return f"OneWayLatch(set={self._set})"


class AtomicCounter:
    """Thread-safe monotonic counter."""

    def __init__(self, initial: int = 0):
        self._lock = threading.Lock()
        self._value = initial

    def increment(self, amount: int = 1) -> int:
        """Add to the counter and return the new value."""
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.value})"


@dataclass
class ProbeState:
    """
    Mutable statistics owned by one ProbeController.

    Attributes:
        probe_count: Every probe seen (live and ready)
        canary_count: Warm-up canaries observed (stops at the warm-up size)
        learned_normal_ms: Mean canary duration, first canary excluded
        failure_threshold_ms: Learned normal plus the allowed slowdown;
            None until two canaries have been observed
        next_canary_at_ms: Clock time of the next scheduled live canary
            (0 = nothing scheduled yet)
        transforms_executed: Canary and real transforms since start
    """
    probe_count: int = 0
    canary_count: int = 0
    learned_normal_ms: int = 0
    failure_threshold_ms: Optional[int] = None
    next_canary_at_ms: int = 0

    transforms_executed: AtomicCounter = field(default_factory=AtomicCounter)
    initialized: OneWayLatch = field(default_factory=OneWayLatch)
    ready_reported: OneWayLatch = field(default_factory=OneWayLatch)
    permanently_failing: OneWayLatch = field(default_factory=OneWayLatch)

    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def snapshot(self) -> Dict[str, Any]:
        """Consistent copy of the state for diagnostics."""
        with self.lock:
            return {
                "probe_count": self.probe_count,
                "canary_count": self.canary_count,
                "learned_normal_ms": self.learned_normal_ms,
                "failure_threshold_ms": self.failure_threshold_ms,
                "next_canary_at_ms": self.next_canary_at_ms,
                "transforms_executed": self.transforms_executed.value,
                "initialized": self.initialized.is_set(),
                "ready_reported": self.ready_reported.is_set(),
                "permanently_failing": self.permanently_failing.is_set(),
            }


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "OneWayLatch",
    "AtomicCounter",
    "ProbeState",
]
