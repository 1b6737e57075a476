# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - Default configuration values
# PURPOSE: Environment overrides with numeric validation and fallbacks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the probe service and the resolver used for the
orchestrator-supplied probe tunables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Resolution never fails: bad values fall back to the default
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# POSITIVE INTEGER RESOLVER
# ============================================================================

def get_positive_int_env(
    name: str,
    default: int,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Resolve a positive integer override.

    Absent, unparsable and non-positive values all resolve to the default.
    The resolved value is logged so operators can see which one won.

    Args:
        name: Override name (e.g. "livenessPercent")
        default: Value used when the override is unusable
        environ: Mapping to read from (os.environ if None)

    Returns:
        The override if it is a positive integer, otherwise the default
    """
    if environ is None:
        environ = os.environ

    value = -1
    raw = environ.get(name)
    if raw is not None:
        try:
            value = int(raw.strip())
        except ValueError:
            logger.debug(f"Ignoring non-numeric override {name}={raw!r}")

    if value <= 0:
        value = default

    logger.info(f"Probe: {name}={value}")
    return value


# ============================================================================
# SERVICE DEFAULTS
# ============================================================================

@dataclass(frozen=True)
class ServiceDefaults:
    """
    Defaults for the probe service process.

    Controls logging and which registered transform backs the probes.
    """
    log_level: str = "INFO"
    log_format: str = "human"  # "human" or "json"

    # Registered transform used for canaries
    transform_name: str = "copy"

    # Scratch directory for canary files (system temp dir if empty)
    temp_dir: str = ""

    @property
    def json_logging(self) -> bool:
        return self.log_format.lower() == "json"

    @classmethod
    def from_env(cls) -> "ServiceDefaults":
        """Create from environment variables."""
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "human"),
            transform_name=os.getenv("PROBE_TRANSFORM", "copy"),
            temp_dir=os.getenv("PROBE_TEMP_DIR", ""),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[ServiceDefaults] = None


def get_defaults() -> ServiceDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = ServiceDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "get_positive_int_env",
    "ServiceDefaults",
    "get_defaults",
    "reset_defaults",
]
