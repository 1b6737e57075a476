# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Tests - Fake clock, scratch storage, controller factory
# PURPOSE: Deterministic timing for probe tests
# CREATED: 19 OCT 2026
# ============================================================================

import pytest

from helpers import FakeClock, ScriptedTransform
from infrastructure.storage import TempFileProvider
from probe.config import ProbeConfig
from probe.controller import ProbeController


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(tmp_path):
    return TempFileProvider(temp_dir=str(tmp_path))


@pytest.fixture
def make_config():
    """Factory for ProbeConfig with the reference scenario defaults."""
    def _make(
        expected_size: int = 1000,
        tolerance: int = 100,
        liveness_percent: int = 50,
        max_transforms: int = 0,
        max_transform_seconds: int = 0,
        liveness_period_seconds: int = 30,
        source_filename: str = "quick.txt",
    ) -> ProbeConfig:
        return ProbeConfig.create(
            source_filename=source_filename,
            target_filename="out.txt",
            expected_size=expected_size,
            tolerance=tolerance,
            liveness_percent=liveness_percent,
            max_transforms=max_transforms,
            max_transform_seconds=max_transform_seconds,
            liveness_period_seconds=liveness_period_seconds,
        )
    return _make


@pytest.fixture
def make_controller(clock, storage, make_config):
    """Factory returning (controller, transform)."""
    def _make(transform=None, **config_kwargs):
        transform = transform or ScriptedTransform(clock)
        controller = ProbeController(
            make_config(**config_kwargs),
            transform,
            storage=storage,
            clock=clock,
            transform_name="scripted",
        )
        return controller, transform
    return _make
