# ============================================================================
# PROBE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Foundation - Core enums and base contracts
# PURPOSE: Define probe kinds, status and error enums and the response contract
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ProbeKind, ProbeStatus, ErrorKind, ProbeDecision, ProbeResponse
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the transform probe service.

These define the values that cross the boundary to the orchestrator:
- Probe kind (live / ready)
- Status outcome (mapped to an HTTP code by the router)
- Error kind (why a probe failed)
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# ============================================================================
# STATUS ENUMS
# ============================================================================

class ProbeKind(str, Enum):
    """Orchestrator probe types."""
    LIVE = "live"      # Failure kills the pod
    READY = "ready"    # Failure withholds traffic

    @property
    def is_live(self) -> bool:
        return self is ProbeKind.LIVE

    @property
    def label(self) -> str:
        """Message label used in every probe response."""
        return "Live Probe: " if self is ProbeKind.LIVE else "Ready Probe: "


class ProbeStatus(str, Enum):
    """
    Status outcome reported to the caller.

    SERVICE_UNAVAILABLE asks the orchestrator to restart the process.
    """
    OK = "ok"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL_ERROR = "internal_error"
    STORAGE_FAILURE = "storage_failure"

    @property
    def http_code(self) -> int:
        return {
            ProbeStatus.OK: 200,
            ProbeStatus.SERVICE_UNAVAILABLE: 429,  # Too Many Requests
            ProbeStatus.INTERNAL_ERROR: 500,
            ProbeStatus.STORAGE_FAILURE: 507,      # Insufficient Storage
        }[self]


class ErrorKind(str, Enum):
    """Reasons a probe can fail."""
    STORAGE_FAILURE = "storage_failure"
    OUTPUT_MISSING = "output_missing"
    OUTPUT_SIZE_OUT_OF_RANGE = "output_size_out_of_range"
    DEGRADED = "degraded"
    TOO_MANY_REQUESTS = "too_many_requests"
    TRANSFORM_FAILED = "transform_failed"

    @property
    def status(self) -> ProbeStatus:
        """Caller-visible status for this kind of failure."""
        if self is ErrorKind.STORAGE_FAILURE:
            return ProbeStatus.STORAGE_FAILURE
        if self is ErrorKind.TOO_MANY_REQUESTS:
            return ProbeStatus.SERVICE_UNAVAILABLE
        return ProbeStatus.INTERNAL_ERROR


class ProbeDecision(str, Enum):
    """Outcome of the scheduling decision."""
    RUN_CANARY = "run_canary"
    NO_OP = "no_op"


# ============================================================================
# RESPONSE CONTRACT
# ============================================================================

class ProbeResponse(BaseModel):
    """
    Body returned to the orchestrator for /live and /ready.
    """
    status: ProbeStatus
    message: str = Field(..., description="Prefixed with probe number and kind")
    probe: ProbeKind
    probe_count: int = Field(..., ge=1)
    error_kind: Optional[ErrorKind] = None
    elapsed_ms: Optional[int] = Field(default=None, ge=0)
    output_size: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}
