# ============================================================================
# SCRATCH STORAGE TESTS
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Tests - Temporary file provider
# PURPOSE: Fixture copies, scratch targets, cleanup, error mapping
# CREATED: 19 OCT 2026
# ============================================================================
"""
Scratch Storage Tests

Run with:
    pytest tests/test_storage.py -v
"""

import pytest

from infrastructure.storage import StorageError, TempFileProvider
from transforms.examples import QUICK_FIXTURE, QUICK_FIXTURE_SIZE


class TestTempFileProvider:
    """Scratch files for canaries."""

    def test_create_temp_file(self, storage, tmp_path):
        path = storage.create_temp_file("target_", "_out.txt")

        assert path.parent == tmp_path
        assert path.name.startswith("target_")
        assert path.name.endswith("_out.txt")
        assert path.stat().st_size == 0

    def test_temp_files_are_unique(self, storage):
        first = storage.create_temp_file("t_", ".bin")
        second = storage.create_temp_file("t_", ".bin")

        assert first != second

    def test_missing_directory_raises(self, tmp_path):
        storage = TempFileProvider(temp_dir=str(tmp_path / "nope"))

        with pytest.raises(StorageError, match="Failed to create temporary file"):
            storage.create_temp_file("t_", ".bin")

    def test_copy_fixture(self, storage):
        path = storage.copy_fixture(QUICK_FIXTURE)

        data = path.read_bytes()
        assert len(data) == QUICK_FIXTURE_SIZE
        assert data.startswith(b"The quick brown fox")
        assert path.name.startswith("source_")

    def test_missing_fixture_raises_and_cleans_up(self, storage, tmp_path):
        with pytest.raises(StorageError, match="Failed to store the source file missing.bin"):
            storage.copy_fixture("missing.bin")

        assert list(tmp_path.iterdir()) == []

    def test_unknown_fixture_package_raises(self, tmp_path):
        storage = TempFileProvider(temp_dir=str(tmp_path), fixture_package="no_such_fixtures")

        with pytest.raises(StorageError):
            storage.copy_fixture(QUICK_FIXTURE)

    def test_remove_ignores_missing_and_none(self, storage):
        path = storage.create_temp_file("t_", ".bin")

        storage.remove(path, None)
        storage.remove(path)

        assert not path.exists()
