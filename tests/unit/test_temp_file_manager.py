#!/usr/bin/env python3
"""
Unit tests for scoped temporary files.
"""

import io

import pytest

from docthumbs.utils.temp_file_manager import TempFileManager, delete_quietly


@pytest.mark.unit
class TestTempFileManager:
    """Test suite for TempFileManager."""

    def test_base_dir_created(self, tmp_path):
        base = tmp_path / "nested" / "scratch"
        manager = TempFileManager(base)
        assert manager.base_temp_dir == base
        assert base.is_dir()

    def test_create_temp_path(self, temp_file_manager, temp_dir):
        path = temp_file_manager.create_temp_path("doc-", ".pdf")
        assert path.parent == temp_dir
        assert path.name.startswith("doc-")
        assert path.suffix == ".pdf"
        assert path.exists()

    def test_temporary_file_removed_on_exit(self, temp_file_manager):
        with temp_file_manager.temporary_file("frame-", ".jpg") as path:
            path.write_bytes(b"jpeg")
        assert not path.exists()

    def test_temporary_file_removed_on_error(self, temp_file_manager):
        with pytest.raises(RuntimeError):
            with temp_file_manager.temporary_file("frame-") as path:
                raise RuntimeError("extraction failed")
        assert not path.exists()

    def test_materialize_copies_stream(self, temp_file_manager):
        with temp_file_manager.materialize(io.BytesIO(b"video bytes"), "video-") as path:
            assert path.read_bytes() == b"video bytes"
        assert not path.exists()

    def test_delete_quietly(self, tmp_path):
        target = tmp_path / "gone.txt"
        target.write_text("x")
        delete_quietly(target)
        assert not target.exists()

        delete_quietly(target)
        delete_quietly(None)
