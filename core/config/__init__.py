# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the probe service.
"""

from core.config.defaults import (
    ServiceDefaults,
    get_positive_int_env,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ServiceDefaults",
    "get_positive_int_env",
    "get_defaults",
    "reset_defaults",
]
