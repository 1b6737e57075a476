# ============================================================================
# VERSION - TRANSFORM PROBE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# ============================================================================
"""
Version information for the Transform Probe service.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch.build
# Criteria for 0.1 - warm-up baseline and sticky failure latch work
__version__ = "0.1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-19"

EPOCH = 1
CODENAME = "Transform Probe"
