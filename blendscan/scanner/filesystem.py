"""Filesystem traversal utilities for scanning directories."""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from blendscan.scanner.models import ParsedFilename

logger = logging.getLogger(__name__)

WALK_ERROR_PREFIX = "(walk error)"


@dataclass
class WalkEntry:
    path: Path
    is_file: bool = False
    is_dir: bool = False
    error: OSError | None = None


def parse_filename(filename: str) -> ParsedFilename:
    if not filename:
        return ParsedFilename(full=filename, base=filename, extension=None)

    dot_index = filename.rfind(".")

    if dot_index <= 0 or dot_index == len(filename) - 1:
        return ParsedFilename(full=filename, base=filename.rstrip("."), extension=None)

    extension = filename[dot_index + 1 :].lower()
    base = filename[:dot_index]

    return ParsedFilename(full=filename, base=base, extension=extension)


def walk_entries(root: Path) -> Iterator[WalkEntry]:
    """Depth-first walk of ``root``, yielding the root itself first.

    Directories are yielded before their contents and entries within a
    directory come in name order. Unreadable directories produce an entry
    with ``error`` set and the walk carries on with their siblings.
    """
    try:
        is_dir = root.is_dir()
    except OSError as e:
        logger.error("Error reading scan root %s: %s", root, e)
        yield WalkEntry(path=root, error=e)
        return

    if not is_dir:
        yield WalkEntry(path=root, is_file=root.is_file())
        return

    yield WalkEntry(path=root, is_dir=True)
    yield from _walk_recursive(root)


def _walk_recursive(directory: Path) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except PermissionError as e:
        logger.warning("Permission denied listing directory: %s", directory)
        yield WalkEntry(path=directory, error=e)
        return
    except OSError as e:
        logger.error("Error listing directory %s: %s", directory, e)
        yield WalkEntry(path=directory, error=e)
        return

    for entry in entries:
        walk_entry = _classify_entry(entry)
        yield walk_entry
        if walk_entry.is_dir:
            yield from _walk_recursive(walk_entry.path)


def _classify_entry(entry: os.DirEntry) -> WalkEntry:
    path = Path(entry.path)
    try:
        # Symlinked files count as files; symlinked directories are not descended into.
        is_dir = entry.is_dir(follow_symlinks=False)
        is_file = entry.is_file()
    except PermissionError as e:
        logger.warning("Permission denied: %s", entry.path)
        return WalkEntry(path=path, error=e)
    except OSError as e:
        logger.error("Error processing %s: %s", entry.path, e)
        return WalkEntry(path=path, error=e)

    return WalkEntry(path=path, is_file=is_file, is_dir=is_dir)


def describe_walk_error(error: OSError) -> str:
    return f"{WALK_ERROR_PREFIX} {error}"


def relative_segments(path: Path, root: Path) -> tuple[str, ...]:
    """Directory names between ``root`` and the file at ``path``."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        return ()
    return relative.parent.parts


def format_timestamp(timestamp: float | None) -> str | None:
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp).astimezone().isoformat()


def get_birthtime(stat_result: os.stat_result) -> float | None:
    try:
        return stat_result.st_birthtime
    except AttributeError:
        return None
