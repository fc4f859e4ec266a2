"""Hand paths over to the operating system's default handlers."""

from pathlib import Path

import click

from blendscan.exceptions import OpenPathError, PathNotFoundError


def open_path(path: str | Path) -> None:
    """Open a file or folder with its default application."""
    target = _existing(path)
    if click.launch(str(target)) != 0:
        raise OpenPathError(f"Could not open {target}")


def reveal_path(path: str | Path) -> None:
    """Open the folder containing ``path`` in the file manager."""
    target = _existing(path)
    if click.launch(str(target), locate=True) != 0:
        raise OpenPathError(f"Could not reveal {target}")


def _existing(path: str | Path) -> Path:
    target = Path(path)
    if not target.exists():
        raise PathNotFoundError(f"Path does not exist: {target}")
    return target
