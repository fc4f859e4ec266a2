"""Tests for the command line interface."""

# pylint: disable=redefined-outer-name

import dataclasses
import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from blendfiles import build_blend, end_block, scene_block, thumbnail_block
from blendscan.cli import cli
from blendscan.scanner import ScanRegistry, ScanSnapshot, ScanStatus


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "props").mkdir(parents=True)
    (root / "shot.blend").write_bytes(build_blend(scene_block(b"EEVEE"), end_block()))
    (root / "props" / "crate.blend").write_bytes(build_blend(thumbnail_block(2, 2), end_block()))
    return root


class TestInfo:
    """Tests for the info command."""

    def test_text_output(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["info", str(project / "shot.blend")])

        assert result.exit_code == 0
        assert "2.8.0 (raw 280, 64-bit, little endian)" in result.output
        assert "Eevee" in result.output
        assert "Thumbnail: none" in result.output

    def test_json_output(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["info", "--json", str(project / "props" / "crate.blend")])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["version"] == "2.8.0"
        assert data["thumb_width"] == 2
        assert data["thumbnail"]

    def test_not_a_blend_file(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "fake.blend"
        path.write_text("hello, this is not a blend file")

        result = runner.invoke(cli, ["info", str(path)])

        assert result.exit_code == 0
        assert "Unknown (Not a blend file)" in result.output


class TestScan:
    """Tests for the scan command."""

    def test_json(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["scan", "--json", "--poll-interval", "0.01", str(project)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "done"
        assert data["found_blends"] == 2
        assert data["result"]["tree"]["name"] == "project"
        assert [f["name"] for f in data["result"]["files"]] == ["crate.blend", "shot.blend"]

    def test_tree(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["scan", "--poll-interval", "0.01", str(project)])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "project/"
        assert lines[1] == "  props/"
        assert lines[2].startswith("    crate.blend")
        assert lines[3].startswith("  shot.blend")
        assert "Eevee" in lines[3]

    def test_flat_list(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["scan", "--no-tree", "--poll-interval", "0.01", str(project)])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[0].startswith("crate.blend")

    def test_missing_root(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["scan", str(tmp_path / "nowhere")])

        assert result.exit_code == 1
        assert "Folder does not exist" in result.output

    def test_scan_without_result(self, runner: CliRunner, project: Path, monkeypatch):
        def cancelled_poll(registry: ScanRegistry, job_id: int) -> ScanSnapshot:
            finished = registry.wait(job_id, 10)
            return dataclasses.replace(finished, status=ScanStatus.CANCELLED, result=None)

        monkeypatch.setattr(ScanRegistry, "poll_scan", cancelled_poll)

        for args in (["scan", str(project)], ["search", str(project), "crate"]):
            result = runner.invoke(cli, args)

            assert result.exit_code == 1
            assert isinstance(result.exception, SystemExit)
            assert "ended without a result (status: cancelled)" in result.output


class TestSearch:
    """Tests for the search command."""

    def test_finds_by_name(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["search", str(project), "CRATE"])

        assert result.exit_code == 0
        assert "crate.blend" in result.stdout
        assert "shot.blend" not in result.stdout
        assert "1 matching files" in result.stdout

    def test_limit(self, runner: CliRunner, project: Path):
        result = runner.invoke(cli, ["search", "--limit", "1", str(project), ".blend"])

        assert result.exit_code == 0
        assert "2 matching files" in result.stdout
        assert "Showing first 1 results" in result.stdout


class TestThumbnail:
    """Tests for the thumbnail command."""

    def test_writes_png(self, runner: CliRunner, project: Path, tmp_path: Path):
        output = tmp_path / "crate.png"
        result = runner.invoke(cli, ["thumbnail", str(project / "props" / "crate.blend"), str(output)])

        assert result.exit_code == 0
        assert output.read_bytes().startswith(b"\x89PNG")
        assert "2x2" in result.output

    def test_no_thumbnail(self, runner: CliRunner, project: Path, tmp_path: Path):
        output = tmp_path / "shot.png"
        result = runner.invoke(cli, ["thumbnail", str(project / "shot.blend"), str(output)])

        assert result.exit_code == 1
        assert "no embedded thumbnail" in result.output
        assert not output.exists()

    def test_negative_dimensions(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "flipped.blend"
        path.write_bytes(build_blend(thumbnail_block(-2, -2, bytes(16)), end_block()))
        output = tmp_path / "flipped.png"

        result = runner.invoke(cli, ["thumbnail", str(path), str(output)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "no embedded thumbnail" in result.output
        assert not output.exists()


class TestOpenAndReveal:
    """Tests for the open and reveal commands."""

    def test_open(self, runner: CliRunner, project: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(click, "launch", lambda url, locate=False: calls.append((url, locate)) or 0)

        result = runner.invoke(cli, ["open", str(project / "shot.blend")])

        assert result.exit_code == 0
        assert calls == [(str(project / "shot.blend"), False)]

    def test_reveal(self, runner: CliRunner, project: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(click, "launch", lambda url, locate=False: calls.append((url, locate)) or 0)

        result = runner.invoke(cli, ["reveal", str(project / "shot.blend")])

        assert result.exit_code == 0
        assert calls == [(str(project / "shot.blend"), True)]

    def test_launch_failure(self, runner: CliRunner, project: Path, monkeypatch):
        monkeypatch.setattr(click, "launch", lambda url, locate=False: 3)

        result = runner.invoke(cli, ["open", str(project)])

        assert result.exit_code == 1
        assert "Could not open" in result.output

    def test_missing_path(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["open", str(tmp_path / "gone.blend")])

        assert result.exit_code == 1
        assert "Path does not exist" in result.output
