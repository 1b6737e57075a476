# ============================================================================
# PROBE ROUTER
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - FastAPI probe endpoints
# PURPOSE: Kubernetes live/ready endpoints backed by the probe controller
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Router

Endpoints:
    GET /live             - Liveness probe. A non-200 status makes Kubernetes
                            restart the container.
    GET /ready            - Readiness probe. A non-200 status withholds traffic.
    GET /probe/state      - Learned baseline, counters and latches (debugging)
    GET /probe/transforms - Registered transforms and their probe defaults

Response Codes:
    200 - OK
    429 - Too many transforms or a transform took too long; restart requested
    500 - Canary failed (wrong output, degraded, transform error)
    507 - Scratch files could not be written
    503 - No controller configured yet
"""

import asyncio
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.contracts import ProbeKind
from core.logging import ComponentType, get_logger
from probe.controller import ProbeController
from transforms.registry import list_transforms

logger = get_logger(__name__, ComponentType.API)

probe_router = APIRouter(tags=["Probes"])

_controller: Optional[ProbeController] = None


def set_probe_controller(controller: Optional[ProbeController]) -> None:
    """Set the controller used by the probe endpoints."""
    global _controller
    _controller = controller


def get_probe_controller() -> Optional[ProbeController]:
    return _controller


def _not_configured() -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"status": "not_configured", "message": "Probe controller not initialized"},
    )


async def _run_probe(kind: ProbeKind) -> JSONResponse:
    """Run the probe in a worker thread; the canary transform blocks."""
    controller = _controller
    if controller is None:
        logger.warning(f"{kind.value} probe received before the controller was configured")
        return _not_configured()

    outcome = await asyncio.to_thread(controller.probe, kind)
    return JSONResponse(
        status_code=outcome.status.http_code,
        content=outcome.to_dict(),
    )


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@probe_router.get("/live")
async def liveness_probe():
    """
    Kubernetes liveness probe.

    Runs a canary transform during warm-up and then once per
    livenessTransformPeriodSeconds; answers immediately otherwise.
    """
    return await _run_probe(ProbeKind.LIVE)


# ============================================================================
# READINESS PROBE
# ============================================================================

@probe_router.get("/ready")
async def readiness_probe():
    """
    Kubernetes readiness probe.

    Runs a canary only until one has completed.
    """
    return await _run_probe(ProbeKind.READY)


# ============================================================================
# STATE
# ============================================================================

@probe_router.get("/probe/state")
async def probe_state():
    """Current probe statistics."""
    controller = _controller
    if controller is None:
        return _not_configured()
    return controller.snapshot()


# ============================================================================
# TRANSFORMS
# ============================================================================

@probe_router.get("/probe/transforms")
async def registered_transforms():
    """Registered transforms, their probe defaults and the one in use."""
    controller = _controller
    return {
        "active": controller.transform_name if controller is not None else None,
        "transforms": list_transforms(),
    }


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "probe_router",
    "set_probe_controller",
    "get_probe_controller",
]
