# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core module initialization
# PURPOSE: Export core contracts
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import (
    ProbeKind,
    ProbeStatus,
    ErrorKind,
    ProbeDecision,
    ProbeResponse,
)

__all__ = [
    # Enums
    "ProbeKind",
    "ProbeStatus",
    "ErrorKind",
    "ProbeDecision",
    # Models
    "ProbeResponse",
]
