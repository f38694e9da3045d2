"""Tests for file utilities."""

import io
from pathlib import Path

import pytest

from ringtone_bridge.tools.file_utils import (
    cache_file_path,
    copy_stream_to_file,
    current_millis,
    ensure_dir,
    format_size,
)


class BrokenStream(io.RawIOBase):
    def readable(self):
        return True

    def readinto(self, b):
        raise OSError("read error")


class TestCacheFilePath:
    """Tests for cache_file_path."""

    def test_default_name(self, tmp_path):
        path = cache_file_path(tmp_path, clock=lambda: 1234)
        assert path == tmp_path / "bakers_ringtone_1234.dat"

    def test_custom_affixes(self, tmp_path):
        path = cache_file_path(tmp_path, prefix="a_", suffix=".ogg", clock=lambda: 9)
        assert path.name == "a_9.ogg"

    def test_uses_wall_clock(self, tmp_path):
        before = current_millis()
        millis = int(cache_file_path(tmp_path).stem.rsplit("_", 1)[1])
        after = current_millis()
        assert before <= millis <= after


class TestCopyStreamToFile:
    """Tests for copy_stream_to_file."""

    def test_copies_and_closes(self, tmp_path):
        source = io.BytesIO(b"x" * 100_000)
        dest = tmp_path / "out.dat"

        written = copy_stream_to_file(source, dest, chunk_size=4096)

        assert written == 100_000
        assert dest.read_bytes() == b"x" * 100_000
        assert source.closed

    def test_empty_stream(self, tmp_path):
        dest = tmp_path / "empty.dat"
        assert copy_stream_to_file(io.BytesIO(b""), dest) == 0
        assert dest.read_bytes() == b""

    def test_failure_removes_destination(self, tmp_path):
        source = BrokenStream()
        dest = tmp_path / "partial.dat"

        with pytest.raises(OSError, match="read error"):
            copy_stream_to_file(source, dest)

        assert not dest.exists()
        assert source.closed

    def test_missing_directory(self, tmp_path):
        source = io.BytesIO(b"abc")
        with pytest.raises(FileNotFoundError):
            copy_stream_to_file(source, tmp_path / "missing" / "out.dat")
        assert source.closed

    def test_directory_destination_left_alone(self, tmp_path):
        source = io.BytesIO(b"abc")
        dest = tmp_path / "taken"
        dest.mkdir()
        (dest / "keep.txt").write_text("keep")

        with pytest.raises(IsADirectoryError):
            copy_stream_to_file(source, dest)

        assert dest.is_dir()
        assert (dest / "keep.txt").read_text() == "keep"
        assert source.closed

    def test_unopenable_destination_not_removed(self, tmp_path, monkeypatch):
        dest = tmp_path / "existing.dat"
        dest.write_bytes(b"earlier copy")

        def refuse(*args, **kwargs):
            raise PermissionError("Permission denied")

        monkeypatch.setattr("ringtone_bridge.tools.file_utils.open", refuse, raising=False)
        with pytest.raises(PermissionError):
            copy_stream_to_file(io.BytesIO(b"abc"), dest)

        assert dest.read_bytes() == b"earlier copy"


class TestEnsureDir:
    """Tests for ensure_dir."""

    def test_create_new_dir(self, tmp_path):
        new_dir = tmp_path / "new" / "nested"
        result = ensure_dir(str(new_dir))
        assert result.is_dir()

    def test_existing_dir(self, tmp_path):
        assert ensure_dir(str(tmp_path)) == Path(tmp_path)


class TestFormatSize:
    def test_bytes(self):
        assert format_size(10) == "10.0 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"
