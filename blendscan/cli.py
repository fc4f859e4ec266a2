"""CLI interface for blendscan."""

import json
import logging
import sys
import time
from pathlib import Path

import click

from blendscan.config import Config
from blendscan.decoder import FormatInfo, decode_file, save_thumbnail
from blendscan.exceptions import BlendscanError
from blendscan.opener import open_path, reveal_path
from blendscan.scanner import (
    DirectoryNode,
    FileRecord,
    ProgressReporter,
    ScanRegistry,
    ScanSnapshot,
    ScanStatus,
    search_files,
)
from blendscan.scanner.progress import format_bytes

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more detail (-vv for debug output)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()
    _configure_logging(verbose)


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


@cli.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the final poll result as JSON")
@click.option("--tree/--no-tree", "show_tree", default=True, help="Print the directory tree")
@click.option("--poll-interval", type=float, default=None, help="Seconds between progress polls")
@click.pass_context
def scan(
    ctx: click.Context,
    root: Path,
    as_json: bool,
    show_tree: bool,
    poll_interval: float | None,
) -> None:
    """Scan ROOT for .blend files and report what was found."""
    config: Config = ctx.obj["config"]
    snapshot = _run_scan(config, root, poll_interval)

    if as_json:
        click.echo(json.dumps(snapshot.to_dict(), indent=2))
        return

    if show_tree:
        _echo_tree(snapshot.result.tree)
    else:
        for record in snapshot.result.files:
            _echo_file_row(record)


@cli.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.argument("query")
@click.option("--limit", type=int, default=None, help="Maximum number of results to show")
@click.pass_context
def search(ctx: click.Context, root: Path, query: str, limit: int | None) -> None:
    """Scan ROOT and list .blend files whose name or path contains QUERY."""
    config: Config = ctx.obj["config"]
    snapshot = _run_scan(config, root, None)

    results = search_files(
        snapshot.result.files,
        query,
        limit=limit if limit is not None else config.scanner.search_limit,
    )

    for record in results.matches:
        _echo_file_row(record)
        click.echo(f"    {record.path}")

    click.echo(f"{results.total:,} matching files")
    if results.truncated:
        click.echo(f"Showing first {len(results.matches):,} results. Refine search to see more.")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print metadata as JSON")
@click.pass_context
def info(ctx: click.Context, file_path: Path, as_json: bool) -> None:
    """Show the metadata stored in a single .blend file."""
    config: Config = ctx.obj["config"]
    format_info = decode_file(file_path, config.decoder)

    if as_json:
        click.echo(json.dumps(format_info.to_dict(), indent=2))
        return

    _echo_format_info(file_path, format_info)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--no-flip", is_flag=True, help="Keep rows in stored (bottom-up) order")
@click.pass_context
def thumbnail(ctx: click.Context, file_path: Path, output: Path, no_flip: bool) -> None:
    """Write the preview embedded in FILE_PATH to OUTPUT as a PNG."""
    config: Config = ctx.obj["config"]
    format_info = decode_file(file_path, config.decoder)

    try:
        save_thumbnail(format_info, output, flip=not no_flip)
    except BlendscanError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Saved {format_info.thumb_width}x{format_info.thumb_height} thumbnail to {output}")


@cli.command("open")
@click.argument("path", type=click.Path(path_type=Path))
def open_cmd(path: Path) -> None:
    """Open a file or folder with its default application."""
    _launch(open_path, path)


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
def reveal(path: Path) -> None:
    """Show a file in the system file manager."""
    _launch(reveal_path, path)


def _launch(action, path: Path) -> None:
    try:
        action(path)
    except BlendscanError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run_scan(config: Config, root: Path, poll_interval: float | None) -> ScanSnapshot:
    registry = ScanRegistry(config)
    reporter = ProgressReporter(interval=config.scanner.progress_interval)
    interval = poll_interval if poll_interval is not None else config.scanner.poll_interval

    try:
        job_id = registry.start_scan(root)
    except BlendscanError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        snapshot = registry.poll_scan(job_id)
        while not snapshot.status.is_finished:
            reporter.report_if_needed(snapshot)
            time.sleep(interval)
            snapshot = registry.poll_scan(job_id)
    except KeyboardInterrupt:
        registry.cancel(job_id)
        reporter.report_cancelled(registry.wait(job_id))
        sys.exit(130)

    if snapshot.status is ScanStatus.ERROR:
        click.echo(f"Error: {snapshot.error}", err=True)
        sys.exit(1)
    if snapshot.result is None:
        click.echo(f"Error: scan ended without a result (status: {snapshot.status.value})", err=True)
        sys.exit(1)

    reporter.report_completion(snapshot)
    return snapshot


def _echo_tree(node: DirectoryNode, depth: int = 0) -> None:
    indent = "  " * depth
    if node.is_dir:
        click.echo(f"{indent}{node.name}/")
        for child in node.children or ():
            _echo_tree(child, depth + 1)
        return

    if node.record is not None:
        click.echo(f"{indent}{_file_summary(node.record)}")


def _echo_file_row(record: FileRecord) -> None:
    click.echo(_file_summary(record))


def _file_summary(record: FileRecord) -> str:
    format_info = record.format_info
    version = f"v{format_info.version}" if format_info.version else "v?"
    parts = [record.name, format_bytes(record.size), version]
    if format_info.render_engine:
        parts.append(format_info.render_engine)
    return "  ".join(parts)


def _echo_format_info(file_path: Path, format_info: FormatInfo) -> None:
    click.echo(f"File:      {file_path}")
    click.echo(f"Blender:   {format_info.describe()}")
    click.echo(f"Engine:    {format_info.render_engine or 'unknown'}")
    if format_info.has_thumbnail:
        click.echo(f"Thumbnail: {format_info.thumb_width}x{format_info.thumb_height}")
    else:
        click.echo("Thumbnail: none")
    if format_info.error and format_info.version:
        click.echo(f"Note:      {format_info.error}")


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
