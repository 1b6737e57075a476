# ============================================================================
# TRANSFORM PROBE - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - FastAPI application entry point
# PURPOSE: Expose the self-tuning live/ready probes for a transform service
# CREATED: 19 OCT 2026
# ============================================================================
"""
Transform Probe Main Application

FastAPI application that:
1. Builds a ProbeController for the configured transform (PROBE_TRANSFORM)
2. Serves /live and /ready for Kubernetes

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8090
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, EPOCH
from core.config import get_defaults
from core.logging import configure_logging, get_logger
from infrastructure.storage import TempFileProvider
from probe import ProbeController, probe_router, set_probe_controller
from transforms import list_transforms

defaults = get_defaults()
configure_logging(level=defaults.log_level, json_output=defaults.json_logging)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the probe controller on startup. Probe state lives as long as
    the process; a restart is what clears a permanent failure.
    """
    logger.info(f"Starting Transform Probe v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")

    controller = ProbeController.for_transform(
        defaults.transform_name,
        storage=TempFileProvider(temp_dir=defaults.temp_dir or None),
    )
    transforms = list_transforms()
    logger.info(f"Registered {len(transforms)} transforms: {[t['name'] for t in transforms]}")
    set_probe_controller(controller)
    logger.info(
        f"Probe controller ready for transform '{controller.transform_name}' "
        f"(expected output {controller.config.min_expected_size}-"
        f"{controller.config.max_expected_size} bytes)"
    )

    yield

    logger.info("Shutting down Transform Probe...")
    set_probe_controller(None)


app = FastAPI(
    title="Transform Probe",
    version=__version__,
    lifespan=lifespan,
)
app.include_router(probe_router)


@app.get("/")
async def root():
    """Service identity."""
    return {"service": "transform-probe", "version": __version__, "build_date": BUILD_DATE}
