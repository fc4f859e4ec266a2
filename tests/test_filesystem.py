"""Tests for filesystem utilities."""

import os
from datetime import datetime
from pathlib import Path

import pytest

from blendscan.scanner.filesystem import (
    describe_walk_error,
    format_timestamp,
    parse_filename,
    relative_segments,
    walk_entries,
)
from blendscan.scanner.models import ParsedFilename


class TestParseFilename:
    """Tests for parse_filename function."""

    def test_simple_extension(self):
        result = parse_filename("scene.BLEND")
        assert result == ParsedFilename(full="scene.BLEND", base="scene", extension="blend")

    def test_backup_extension(self):
        result = parse_filename("scene.blend1")
        assert result == ParsedFilename(full="scene.blend1", base="scene", extension="blend1")

    def test_double_extension(self):
        result = parse_filename("archive.blend.gz")
        assert result == ParsedFilename(full="archive.blend.gz", base="archive.blend", extension="gz")

    def test_no_extension(self):
        result = parse_filename("README")
        assert result == ParsedFilename(full="README", base="README", extension=None)

    def test_dotfile_no_extension(self):
        result = parse_filename(".blend")
        assert result == ParsedFilename(full=".blend", base=".blend", extension=None)

    def test_trailing_dot(self):
        result = parse_filename("file.")
        assert result == ParsedFilename(full="file.", base="file", extension=None)

    def test_empty_string(self):
        result = parse_filename("")
        assert result == ParsedFilename(full="", base="", extension=None)

    def test_multiple_dots(self):
        result = parse_filename("my.scene.v2.blend")
        assert result == ParsedFilename(full="my.scene.v2.blend", base="my.scene.v2", extension="blend")


class TestWalkEntries:
    """Tests for walk_entries function."""

    def test_walks_empty_directory(self, tmp_path: Path):
        entries = list(walk_entries(tmp_path))

        assert len(entries) == 1
        assert entries[0].path == tmp_path
        assert entries[0].is_dir

    def test_directory_before_contents(self, tmp_path: Path):
        subdir = tmp_path / "subdir"
        subdir.mkdir()
        (subdir / "nested.blend").write_bytes(b"")
        (tmp_path / "root.blend").write_bytes(b"")

        paths = [e.path for e in walk_entries(tmp_path)]

        assert paths == [tmp_path, tmp_path / "root.blend", subdir, subdir / "nested.blend"]

    def test_alphabetical_order(self, tmp_path: Path):
        for name in ["zebra.blend", "apple.blend", "middle.blend"]:
            (tmp_path / name).write_bytes(b"")

        names = [e.path.name for e in walk_entries(tmp_path) if e.is_file]

        assert names == ["apple.blend", "middle.blend", "zebra.blend"]

    def test_file_symlinks_are_files(self, tmp_path: Path):
        real_file = tmp_path / "real.blend"
        real_file.write_bytes(b"")
        (tmp_path / "link.blend").symlink_to(real_file)

        files = [e.path.name for e in walk_entries(tmp_path) if e.is_file]

        assert files == ["link.blend", "real.blend"]

    def test_dangling_symlink_is_not_a_file(self, tmp_path: Path):
        (tmp_path / "gone.blend").symlink_to(tmp_path / "missing.blend")

        entries = [e for e in walk_entries(tmp_path) if e.path.name == "gone.blend"]

        assert len(entries) == 1
        assert not entries[0].is_file
        assert entries[0].error is None

    def test_does_not_follow_directory_symlinks(self, tmp_path: Path):
        target = tmp_path / "target"
        target.mkdir()
        (target / "a.blend").write_bytes(b"")
        (tmp_path / "loop").symlink_to(target, target_is_directory=True)

        paths = [e.path for e in walk_entries(tmp_path)]

        assert tmp_path / "loop" / "a.blend" not in paths
        assert target / "a.blend" in paths

    def test_root_file(self, tmp_path: Path):
        path = tmp_path / "single.blend"
        path.write_bytes(b"")

        entries = list(walk_entries(path))

        assert len(entries) == 1
        assert entries[0].is_file

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permissions are not enforced for root",
    )
    def test_unreadable_directory_yields_error(self, tmp_path: Path):
        locked = tmp_path / "locked"
        locked.mkdir()
        (tmp_path / "after").mkdir()
        locked.chmod(0)
        try:
            entries = list(walk_entries(tmp_path))
        finally:
            locked.chmod(0o755)

        errors = [e for e in entries if e.error is not None]
        assert len(errors) == 1
        assert errors[0].path == locked
        assert tmp_path / "after" in [e.path for e in entries]


class TestHelpers:
    """Tests for path and time helpers."""

    def test_relative_segments(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / "x.blend"
        assert relative_segments(path, tmp_path) == ("a", "b")

    def test_relative_segments_at_root(self, tmp_path: Path):
        assert relative_segments(tmp_path / "x.blend", tmp_path) == ()

    def test_format_timestamp_is_local_iso(self):
        text = format_timestamp(1_700_000_000.0)

        assert text is not None
        parsed = datetime.fromisoformat(text)
        assert parsed.tzinfo is not None
        assert parsed.timestamp() == 1_700_000_000.0

    def test_format_timestamp_none(self):
        assert format_timestamp(None) is None

    def test_describe_walk_error(self):
        error = PermissionError(13, "Permission denied", "/secret")
        assert describe_walk_error(error).startswith("(walk error) ")
        assert "/secret" in describe_walk_error(error)
