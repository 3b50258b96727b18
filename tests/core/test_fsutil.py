"""Tests for core/fsutil.py - Atomic file helpers."""

import os
from unittest.mock import patch

import pytest

from blue_gardener.core.errors import FilesystemError
from blue_gardener.core.fsutil import atomic_write_text, delete_file, read_text


class TestReadText:

    def test_missing_is_none(self, tmp_path):
        assert read_text(tmp_path / "missing.md") is None

    def test_directory_raises(self, tmp_path):
        with pytest.raises(FilesystemError, match="Could not read"):
            read_text(tmp_path)


class TestAtomicWriteText:

    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "file.md"
        assert atomic_write_text(path, "hello") is True
        assert path.read_text() == "hello"

    def test_identical_content_is_skipped(self, tmp_path):
        path = tmp_path / "file.md"
        atomic_write_text(path, "hello")
        mtime = path.stat().st_mtime_ns

        assert atomic_write_text(path, "hello") is False
        assert path.stat().st_mtime_ns == mtime

    def test_file_is_world_readable(self, tmp_path):
        path = tmp_path / "file.md"
        atomic_write_text(path, "hello")
        assert path.stat().st_mode & 0o644 == 0o644

    def test_failed_replace_keeps_old_file(self, tmp_path):
        path = tmp_path / "file.md"
        path.write_text("old")

        with patch("blue_gardener.core.fsutil.os.replace", side_effect=OSError(28, "No space left on device")):
            with pytest.raises(FilesystemError, match="No space left on device"):
                atomic_write_text(path, "new")

        assert path.read_text() == "old"
        assert os.listdir(tmp_path) == ["file.md"]


class TestDeleteFile:

    def test_delete(self, tmp_path):
        path = tmp_path / "file.md"
        path.write_text("x")
        assert delete_file(path) is True
        assert delete_file(path) is False
