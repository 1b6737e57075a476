# ============================================================================
# EXAMPLE TRANSFORMS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Examples - Fixture-backed text transforms
# PURPOSE: Runnable transforms for canaries and local development
# CREATED: 19 OCT 2026
# ============================================================================
"""
Example Transforms

Small text transforms over the bundled quick.txt fixture (123 bytes).
Real engines (image, video, document) register themselves the same way.
"""

import shutil
from pathlib import Path

from core.logging import ComponentType, get_logger
from transforms.registry import (
    register_transform,
    ProbeDefaults,
    TransformError,
)

logger = get_logger(__name__, ComponentType.TRANSFORM)

QUICK_FIXTURE = "quick.txt"
QUICK_FIXTURE_SIZE = 123


@register_transform(
    "copy",
    description="Copies the source file unchanged",
    probe=ProbeDefaults(
        source_filename=QUICK_FIXTURE,
        target_filename=QUICK_FIXTURE,
        expected_size=QUICK_FIXTURE_SIZE,
        tolerance=0,
        liveness_percent=150,
        max_transforms=10000,
        max_transform_seconds=30,
        liveness_period_seconds=600,
    ),
)
def copy_transform(source: Path, target: Path) -> None:
    """Copy source to target byte for byte."""
    shutil.copyfile(source, target)


@register_transform(
    "uppercase",
    description="Upper-cases an ASCII text file",
    probe=ProbeDefaults(
        source_filename=QUICK_FIXTURE,
        target_filename="quick_upper.txt",
        expected_size=QUICK_FIXTURE_SIZE,
        tolerance=10,
        liveness_percent=200,
        max_transforms=20000,
        max_transform_seconds=60,
        liveness_period_seconds=300,
    ),
)
def uppercase_transform(source: Path, target: Path) -> None:
    """
    Upper-case the source text.

    Raises:
        TransformError: If the source is not ASCII text
    """
    try:
        text = source.read_bytes().decode("ascii")
    except UnicodeDecodeError as e:
        raise TransformError(f"Source {source.name} is not ASCII text: {e}") from e

    target.write_bytes(text.upper().encode("ascii"))
    logger.debug(f"Upper-cased {len(text)} characters")
