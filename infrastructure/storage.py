# ============================================================================
# SCRATCH FILE STORAGE
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Infrastructure - Temporary file provisioning
# PURPOSE: Fresh source files from bundled fixtures and scratch targets
# CREATED: 19 OCT 2026
# ============================================================================
"""
Scratch File Storage

Provides TempFileProvider for canary transforms:
- copy_fixture: Copy a bundled fixture into a fresh temporary source file
- create_temp_file: Reserve an empty temporary target file
- remove: Best-effort cleanup of scratch files

Every I/O problem surfaces as StorageError so the probe can report a
storage status instead of a generic failure.
"""

import os
import shutil
import tempfile
from importlib import resources
from pathlib import Path
from typing import Optional

from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.STORAGE)

DEFAULT_FIXTURE_PACKAGE = "transforms.fixtures"


class StorageError(Exception):
    """Raised when scratch files cannot be created or written."""
    pass


class TempFileProvider:
    """
    Creates scratch files for canary transforms.

    Usage:
        storage = TempFileProvider()
        source = storage.copy_fixture("quick.txt")
        target = storage.create_temp_file("target_", "_quick.txt")
    """

    def __init__(
        self,
        temp_dir: Optional[str] = None,
        fixture_package: str = DEFAULT_FIXTURE_PACKAGE,
    ):
        """
        Initialize provider.

        Args:
            temp_dir: Directory for scratch files (system temp dir if None)
            fixture_package: Package holding the bundled fixtures
        """
        self.temp_dir = temp_dir or None
        self.fixture_package = fixture_package

    def create_temp_file(self, prefix: str, suffix: str) -> Path:
        """
        Create an empty temporary file and return its path.

        Raises:
            StorageError: If the file cannot be created
        """
        try:
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=self.temp_dir)
        except OSError as e:
            raise StorageError(f"Failed to create temporary file: {e}") from e

        # Only the path is handed out
        try:
            os.close(fd)
        except OSError as e:
            raise StorageError(f"Failed to close temporary file {name}: {e}") from e

        return Path(name)

    def copy_fixture(self, fixture_name: str, prefix: str = "source_") -> Path:
        """
        Copy a bundled fixture into a fresh temporary file.

        Args:
            fixture_name: File name inside the fixture package
            prefix: Prefix for the temporary file name

        Returns:
            Path to the new source file

        Raises:
            StorageError: If the fixture is missing or cannot be copied
        """
        target = self.create_temp_file(prefix, f"_{fixture_name}")

        try:
            fixture = resources.files(self.fixture_package).joinpath(fixture_name)
            with fixture.open("rb") as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
        except (OSError, ModuleNotFoundError) as e:
            self.remove(target)
            raise StorageError(f"Failed to store the source file {fixture_name}: {e}") from e

        logger.debug(f"Copied fixture {fixture_name} to {target}")
        return target

    def remove(self, *paths: Optional[Path]) -> None:
        """Delete scratch files, ignoring ones that are already gone."""
        for path in paths:
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove scratch file {path}: {e}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "StorageError",
    "TempFileProvider",
]
