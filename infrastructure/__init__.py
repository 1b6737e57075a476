# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Infrastructure - Scratch file storage
# PURPOSE: Temporary files for canary transforms
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the transform probe.

Provides:
- TempFileProvider: Scratch source/target files for canary transforms
- StorageError: Raised when a scratch file cannot be created or filled

Usage:
    from infrastructure import TempFileProvider

    storage = TempFileProvider(temp_dir="/mnt/scratch")
    source = storage.copy_fixture("quick.txt")
    target = storage.create_temp_file("target_", "_quick.txt")
    ...
    storage.remove(source, target)
"""

from infrastructure.storage import (
    StorageError,
    TempFileProvider,
)

__all__ = [
    "StorageError",
    "TempFileProvider",
]
