# ============================================================================
# PROBE CORE TYPES
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Result types
# PURPOSE: Tickets, canary results and probe outcomes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Core Types

Failures are returned as ProbeOutcome values carrying an ErrorKind rather
than raised; the controller hands the outcome to the caller unchanged and
the router maps its status to an HTTP code.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.contracts import (
    ErrorKind,
    ProbeDecision,
    ProbeKind,
    ProbeResponse,
    ProbeStatus,
)

# Canaries used to learn the normal duration (the first one is discarded)
AVERAGE_OVER_TRANSFORMS = 5


@dataclass(frozen=True)
class ProbeTicket:
    """One probe request after the scheduling decision."""
    kind: ProbeKind
    probe_count: int
    decision: ProbeDecision

    @property
    def is_live(self) -> bool:
        return self.kind.is_live

    @property
    def label(self) -> str:
        """Label without the sequence number, e.g. "Live Probe: "."""
        return self.kind.label

    @property
    def prefix(self) -> str:
        """Message prefix, e.g. "12 Live Probe: "."""
        return f"{self.probe_count} {self.kind.label}"


@dataclass(frozen=True)
class CanaryResult:
    """Measurements from one canary transform."""
    elapsed_ms: int
    output_size: int
    passed: bool = True


@dataclass(frozen=True)
class ProbeOutcome:
    """Status and message returned for one probe."""
    status: ProbeStatus
    message: str
    ticket: ProbeTicket
    error_kind: Optional[ErrorKind] = None
    canary: Optional[CanaryResult] = None

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.OK

    @classmethod
    def success(
        cls,
        ticket: ProbeTicket,
        message: str,
        canary: Optional[CanaryResult] = None,
    ) -> "ProbeOutcome":
        """Create a success outcome; message is prefixed automatically."""
        return cls(
            status=ProbeStatus.OK,
            message=ticket.prefix + message,
            ticket=ticket,
            canary=canary,
        )

    @classmethod
    def failure(
        cls,
        ticket: ProbeTicket,
        kind: ErrorKind,
        message: str,
        canary: Optional[CanaryResult] = None,
    ) -> "ProbeOutcome":
        """Create a failure outcome; status is derived from the error kind."""
        return cls(
            status=kind.status,
            message=ticket.prefix + message,
            ticket=ticket,
            error_kind=kind,
            canary=canary,
        )

    def to_response(self) -> ProbeResponse:
        """Convert to the response contract."""
        return ProbeResponse(
            status=self.status,
            message=self.message,
            probe=self.ticket.kind,
            probe_count=self.ticket.probe_count,
            error_kind=self.error_kind,
            elapsed_ms=self.canary.elapsed_ms if self.canary else None,
            output_size=self.canary.output_size if self.canary else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.to_response().model_dump(mode="json", exclude_none=True)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "AVERAGE_OVER_TRANSFORMS",
    "ProbeTicket",
    "CanaryResult",
    "ProbeOutcome",
]
