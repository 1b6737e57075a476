# ============================================================================
# PROBE CONFIGURATION
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Immutable canary configuration
# PURPOSE: Resolve canary thresholds from transform defaults and overrides
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Configuration

ProbeConfig is built once per controller from the transform's defaults plus
the orchestrator's environment overrides:

    livenessPercent                 - allowed slowdown over the learned normal (%)
    maxTransforms                   - transforms before a restart is requested
    maxTransformSeconds             - longest acceptable single transform
    livenessTransformPeriodSeconds  - gap between canaries on live probes

Helm charts usually supply all four; the transform defaults differ from the
chart values so it is obvious which one was used.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from core.config.defaults import get_positive_int_env
from transforms.registry import ProbeDefaults

# Overrides read by ProbeConfig.from_env
LIVENESS_PERCENT_ENV = "livenessPercent"
MAX_TRANSFORMS_ENV = "maxTransforms"
MAX_TRANSFORM_SECONDS_ENV = "maxTransformSeconds"
LIVENESS_PERIOD_ENV = "livenessTransformPeriodSeconds"


@dataclass(frozen=True)
class ProbeConfig:
    """
    Immutable canary configuration.

    Attributes:
        source_filename: Bundled fixture copied for every canary
        target_filename: Suffix for the canary output file
        min_expected_size: Smallest acceptable output size (bytes)
        max_expected_size: Largest acceptable output size (bytes)
        liveness_percent: Allowed slowdown over the learned normal
        liveness_period_ms: Gap between live canaries (0 = never after start)
        max_transform_count: Transforms before restart (0 = unlimited)
        max_transform_seconds: Longest single transform (0 = unlimited)
    """
    source_filename: str
    target_filename: str
    min_expected_size: int
    max_expected_size: int
    liveness_percent: int
    liveness_period_ms: int = 0
    max_transform_count: int = 0
    max_transform_seconds: int = 0

    def __post_init__(self):
        if self.min_expected_size > self.max_expected_size:
            raise ValueError(
                f"min_expected_size ({self.min_expected_size}) exceeds "
                f"max_expected_size ({self.max_expected_size})"
            )

    @property
    def max_transform_ms(self) -> int:
        return self.max_transform_seconds * 1000

    @classmethod
    def create(
        cls,
        source_filename: str,
        target_filename: str,
        expected_size: int,
        tolerance: int,
        liveness_percent: int,
        max_transforms: int = 0,
        max_transform_seconds: int = 0,
        liveness_period_seconds: int = 0,
    ) -> "ProbeConfig":
        """Create from an expected output size and a +/- tolerance."""
        return cls(
            source_filename=source_filename,
            target_filename=target_filename,
            min_expected_size=max(0, expected_size - tolerance),
            max_expected_size=expected_size + tolerance,
            liveness_percent=liveness_percent,
            liveness_period_ms=liveness_period_seconds * 1000,
            max_transform_count=max_transforms,
            max_transform_seconds=max_transform_seconds,
        )

    @classmethod
    def from_env(
        cls,
        defaults: ProbeDefaults,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ProbeConfig":
        """
        Create from transform defaults with environment overrides applied.

        Args:
            defaults: Probe defaults registered with the transform
            environ: Mapping to read overrides from (os.environ if None)
        """
        return cls.create(
            source_filename=defaults.source_filename,
            target_filename=defaults.target_filename,
            expected_size=defaults.expected_size,
            tolerance=defaults.tolerance,
            liveness_percent=get_positive_int_env(
                LIVENESS_PERCENT_ENV, defaults.liveness_percent, environ),
            max_transforms=get_positive_int_env(
                MAX_TRANSFORMS_ENV, defaults.max_transforms, environ),
            max_transform_seconds=get_positive_int_env(
                MAX_TRANSFORM_SECONDS_ENV, defaults.max_transform_seconds, environ),
            liveness_period_seconds=get_positive_int_env(
                LIVENESS_PERIOD_ENV, defaults.liveness_period_seconds, environ),
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeConfig",
    "LIVENESS_PERCENT_ENV",
    "MAX_TRANSFORMS_ENV",
    "MAX_TRANSFORM_SECONDS_ENV",
    "LIVENESS_PERIOD_ENV",
]
